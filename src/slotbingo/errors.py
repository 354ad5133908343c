class InvariantViolation(RuntimeError):
    """Raised when engine state breaks a rule that correct sequencing guarantees.

    Never used for expected control flow; rejected player actions are reported
    as ``Rejected`` values instead.
    """
