"""Error types raised by chunk ranges."""


class StoreClosedError(OSError):
    """Raised when a closed store is read through any range or view."""


class ContractViolation(AssertionError):
    """A caller broke a precondition (empty access, bad slice bounds)."""


class BoundsViolation(ContractViolation, IndexError):
    """Index outside the current window."""


def require(condition: bool, message: str) -> None:
    if not condition:
        raise ContractViolation(message)


def require_index(index: int, length: int) -> None:
    if index < 0 or index >= length:
        raise BoundsViolation(f"index {index} out of range for length {length}")
