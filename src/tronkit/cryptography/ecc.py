"""
Affine elliptic curve arithmetic over F_p.

TRON account keys live on secp256k1 (y^2 = x^3 + 7); SECP256K1 is the shared, read-only instance. Private scalars
only ever reach this module through multiply_generator, which walks a table of G, 2G, 4G, ... built once at import.
"""
import json
from dataclasses import dataclass
from typing import Optional, Tuple

from .ecc_math import is_quadratic_residue, tonelli_shanks

__all__ = ["EllipticCurve", "Point", "SECP256K1"]


@dataclass(frozen=True)
class Point:
    """Affine point. Point() is the point at infinity and is falsy"""
    x: Optional[int] = None
    y: Optional[int] = None

    def __post_init__(self):
        if (self.x is None) != (self.y is None):
            raise ValueError("Point at infinity must have both coordinates as None")

    def __bool__(self) -> bool:
        return self.x is not None

    def __iter__(self):
        yield self.x
        yield self.y

    @property
    def tuple(self):
        return self.x, self.y


class EllipticCurve:
    """
    E: y^2 = x^3 + ax + b (mod p), with a cyclic group of the given order generated by `generator`
    """

    def __init__(self, a: int, b: int, p: int, order: int, generator: Tuple[int, int] | Point,
                 curve: Optional[str] = None):
        if (4 * a ** 3 + 27 * b ** 2) % p == 0:
            raise ValueError("Cannot use Singular curve in ECC")

        self.a = a
        self.b = b
        self.p = p
        self.order = order
        self.generator = generator if isinstance(generator, Point) else Point(*generator)
        self.curve = curve

        # G, 2G, 4G, ... 2^255 G. Read-only after construction
        self._generator_table = self._build_generator_table()

    def __repr__(self):
        fields = {'a': hex(self.a), 'b': hex(self.b), 'p': hex(self.p), 'order': hex(self.order),
                  'generator': [hex(c) for c in self.generator]}
        if self.curve:
            fields['curve'] = self.curve
        return json.dumps(fields)

    def _build_generator_table(self) -> tuple:
        table = []
        point = self.generator
        while point and len(table) < self.order.bit_length():
            table.append(point)
            point = self.add_points(point, point)
        return tuple(table)

    # --- CURVE MEMBERSHIP --- #
    def x_terms(self, x: int) -> int:
        """x^3 + ax + b mod p"""
        return (pow(x, 3, self.p) + self.a * x + self.b) % self.p

    def is_point_on_curve(self, point: Point) -> bool:
        if not point:
            return True
        return pow(point.y, 2, self.p) == self.x_terms(point.x)

    def is_x_on_curve(self, x: int) -> bool:
        return is_quadratic_residue(self.x_terms(x), self.p)

    def find_y_from_x(self, x: int) -> int:
        """The smaller of the two square roots of x^3 + ax + b"""
        if not self.is_x_on_curve(x):
            raise ValueError(f"Given x coordinate {x} is not on the curve.")
        root = tonelli_shanks(self.x_terms(x), self.p)
        return min(root, self.p - root)

    # --- GROUP LAW --- #
    def _chord_or_tangent(self, p1: Point, p2: Point) -> Optional[int]:
        """
        Slope of the line through p1 and p2 (tangent when equal). None when p1 = -p2
        """
        if p1.x != p2.x:
            return (p2.y - p1.y) * pow(p2.x - p1.x, -1, self.p) % self.p
        if (p1.y + p2.y) % self.p == 0:
            return None
        return (3 * p1.x * p1.x + self.a) * pow(2 * p1.y, -1, self.p) % self.p

    def add_points(self, point1: Point, point2: Point) -> Point:
        if not point1:
            return point2
        if not point2:
            return point1

        slope = self._chord_or_tangent(point1, point2)
        if slope is None:
            return Point()

        x3 = (slope * slope - point1.x - point2.x) % self.p
        y3 = (slope * (point1.x - x3) - point1.y) % self.p
        return Point(x3, y3)

    def scalar_multiplication(self, n: int, point: Point) -> Point:
        """
        nP by double-and-add. Multiples of the generator go through the precomputed table.
        """
        n %= self.order
        if not point or n == 0:
            return Point()
        if point == self.generator:
            return self.multiply_generator(n)

        total = Point()
        while n:
            if n & 1:
                total = self.add_points(total, point)
            point = self.add_points(point, point)
            n >>= 1
        return total

    def multiply_generator(self, n: int) -> Point:
        n %= self.order
        total = Point()
        for doubling in self._generator_table:
            if not n:
                break
            if n & 1:
                total = self.add_points(total, doubling)
            n >>= 1
        return total


# --- SECP256K1 --- #
SECP256K1 = EllipticCurve(
    a=0,
    b=7,
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    order=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    generator=(0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
               0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8),
    curve="secp256k1",
)
