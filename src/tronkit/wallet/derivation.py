"""
The DerivationPath class - an ordered sequence of (index, hardened) BIP32 segments
"""
from dataclasses import dataclass

from tronkit.core import TRON, XKEYS, ValidationError

__all__ = ["DerivationPath", "PathSegment"]

HARDENED_OFFSET = XKEYS.HARDENED_OFFSET


@dataclass(frozen=True)
class PathSegment:
    index: int
    hardened: bool = False

    def __post_init__(self):
        if not 0 <= self.index < HARDENED_OFFSET:
            raise ValidationError(f"Path index must lie in [0, 2^31), received {self.index}")

    @property
    def child_number(self) -> int:
        """The 32-bit BIP32 child number"""
        return self.index + HARDENED_OFFSET if self.hardened else self.index

    def __str__(self):
        return f"{self.index}'" if self.hardened else str(self.index)


@dataclass(frozen=True)
class DerivationPath:
    segments: tuple[PathSegment, ...]

    @classmethod
    def parse(cls, path: str) -> "DerivationPath":
        """
        Parse e.g. "m/44'/195'/0'/0/5". Hardened segments may end in ' or h.
        """
        parts = path.strip().split("/")
        if parts[0] != "m":
            raise ValidationError("Path must start with 'm'")

        segments = []
        for part in parts[1:]:
            hardened = part.endswith(("'", "h", "H"))
            digits = part[:-1] if hardened else part
            if not digits.isdigit():
                raise ValidationError(f"Invalid path segment: {part!r}")
            segments.append(PathSegment(int(digits), hardened))
        return cls(tuple(segments))

    @classmethod
    def tron(cls, index: int = 0, account: int = 0, change: int = 0) -> "DerivationPath":
        """
        BIP44 TRON path m/44'/195'/account'/change/index
        """
        return cls.tron_account(account, change).child(index)

    @classmethod
    def tron_account(cls, account: int = 0, change: int = 0) -> "DerivationPath":
        """
        The fixed prefix m/44'/195'/account'/change shared by every leaf of a batch
        """
        return cls((
            PathSegment(TRON.BIP44_PURPOSE, True),
            PathSegment(TRON.COIN_TYPE, True),
            PathSegment(account, True),
            PathSegment(change, False),
        ))

    def child(self, index: int, hardened: bool = False) -> "DerivationPath":
        return DerivationPath(self.segments + (PathSegment(index, hardened),))

    def with_leaf(self, index: int) -> "DerivationPath":
        """Replace the final segment's index, keeping its hardening"""
        if not self.segments:
            raise ValidationError("Cannot replace the leaf of the master path")
        leaf = self.segments[-1]
        return DerivationPath(self.segments[:-1] + (PathSegment(index, leaf.hardened),))

    @property
    def depth(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __str__(self):
        return "/".join(["m"] + [str(s) for s in self.segments])
