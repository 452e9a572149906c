"""
Modular square roots for recovering y from x on a prime-field curve
"""

__all__ = ["is_quadratic_residue", "tonelli_shanks"]


def _legendre(n: int, p: int) -> int:
    """Euler's criterion: 1, p-1 or 0"""
    return pow(n, (p - 1) // 2, p)


def is_quadratic_residue(n: int, p: int) -> bool:
    """0 counts as a residue"""
    return _legendre(n % p, p) != p - 1


def tonelli_shanks(n: int, p: int) -> int:
    """
    r with r^2 = n (mod p), for an odd prime p and a residue n
    """
    n %= p
    if n == 0:
        return 0
    if _legendre(n, p) != 1:
        raise ValueError("Tonelli Shanks called on quadratic non-residue")

    # secp256k1 has p = 3 (mod 4)
    if p % 4 == 3:
        return pow(n, (p + 1) // 4, p)

    # p - 1 = q * 2^s with q odd
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1

    z = next(c for c in range(2, p) if _legendre(c, p) == p - 1)

    m, c, t, r = s, pow(z, q, p), pow(n, q, p), pow(n, (q + 1) // 2, p)
    while t != 1:
        # least i with t^(2^i) = 1
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m, c = i, b * b % p
        t, r = t * c % p, r * b % p
    return r
