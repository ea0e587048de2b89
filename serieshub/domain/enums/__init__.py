from serieshub.domain.enums.failure_kind import FailureKind
from serieshub.domain.enums.write_path import WritePath
__all__ = [
    "FailureKind",
    "WritePath",
]
