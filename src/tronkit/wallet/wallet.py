"""
The Wallet class - ties together Mnemonic and ExtendedKey for TRON HD wallet functionality
"""
from tronkit.cryptography import PrivateKey
from tronkit.wallet.address import Address
from tronkit.wallet.derivation import DerivationPath
from tronkit.wallet.mnemonic import Mnemonic
from tronkit.wallet.xkeys import ExtendedKey

__all__ = ["Wallet", "derive_key"]


def derive_key(seed: bytes, path: DerivationPath | str) -> PrivateKey:
    """
    BIP32 derivation of the private key at `path` from a BIP39 seed
    """
    return ExtendedKey.from_master_seed(seed).derive_path(path).private_key()


class Wallet:
    """
    Hierarchical Deterministic Wallet implementing BIP32/BIP39/BIP44 for coin type 195
    """
    __slots__ = ('mnemonic', 'master_key')

    def __init__(self, mnemonic: Mnemonic | list | str, passphrase: str = ""):
        """
        Args:
            mnemonic: Mnemonic object or a 12/24 word phrase
            passphrase: Optional BIP39 passphrase for seed derivation (default: "")
        """
        self.mnemonic = mnemonic if isinstance(mnemonic, Mnemonic) else Mnemonic(mnemonic)
        self.master_key = ExtendedKey.from_master_seed(self.mnemonic.to_seed(passphrase=passphrase))

    def __repr__(self):
        return f"Wallet({self.mnemonic!r})"

    @classmethod
    def generate(cls, word_count: int = 12, passphrase: str = "") -> "Wallet":
        return cls(Mnemonic.generate(word_count), passphrase)

    def derive_path(self, path: DerivationPath | str) -> ExtendedKey:
        return self.master_key.derive_path(path)

    def derive_key(self, path: DerivationPath | str) -> PrivateKey:
        return self.derive_path(path).private_key()

    def account_key(self, account: int = 0, change: int = 0) -> ExtendedKey:
        """The m/44'/195'/account'/change node whose children are the account's addresses"""
        return self.derive_path(DerivationPath.tron_account(account, change))

    def address_at(self, index: int = 0, account: int = 0) -> tuple[Address, PrivateKey]:
        private_key = self.derive_key(DerivationPath.tron(index, account))
        return Address.from_private_key(private_key), private_key
