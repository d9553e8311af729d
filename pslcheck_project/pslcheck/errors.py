# pslcheck/errors.py


class PSLCheckError(Exception):
    pass


class MalformedRuleError(PSLCheckError):
    """A rule line (or section marker) that does not fit the PSL grammar."""

    def __init__(self, message, line_no=None, line=None):
        self.line_no = line_no
        self.line = line
        if line_no is not None:
            message = f"line {line_no}: {message}: {line!r}"
        super().__init__(message)


class InvalidDomainError(PSLCheckError, ValueError):
    def __init__(self, domain, reason):
        self.domain = domain
        self.reason = reason
        super().__init__(f"Invalid domain {domain!r}: {reason}")
