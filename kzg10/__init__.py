"""
KZG10 다항식 커밋먼트
======================

  setup → commit → open → verify (→ batch verify)

    >>> from kzg10 import SRS, Polynomial, commit, create_opening, verify_opening
    >>> srs = SRS.generate(max_degree=3)
    >>> p = Polynomial([1, 2, 3])
    >>> C = commit(p, srs)
    >>> y, pi = create_opening(p, 5, srs)
    >>> verify_opening(C, pi, 5, y, srs.verification_key)
    True
"""

from kzg10.batch import (
    OpeningClaim,
    fold_claims,
    open_same_point,
    verify_batch,
    verify_batch_same_point,
)
from kzg10.errors import (
    BatchArityMismatch,
    DegreeTooLarge,
    InvalidDegree,
    InvariantViolation,
    KZGError,
    MalformedInput,
)
from kzg10.field import BN128, FR, ToyCurve, get_curve
from kzg10.kzg import commit, create_opening
from kzg10.polynomial import Polynomial
from kzg10.srs import SRS, ProvingKey, VerificationKey
from kzg10.verifier import verify_opening

__all__ = [
    "BN128",
    "FR",
    "SRS",
    "BatchArityMismatch",
    "DegreeTooLarge",
    "InvalidDegree",
    "InvariantViolation",
    "KZGError",
    "MalformedInput",
    "OpeningClaim",
    "Polynomial",
    "ProvingKey",
    "ToyCurve",
    "VerificationKey",
    "commit",
    "create_opening",
    "fold_claims",
    "get_curve",
    "open_same_point",
    "verify_batch",
    "verify_batch_same_point",
    "verify_opening",
]
