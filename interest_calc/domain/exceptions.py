"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class EvaluationError(DomainException):
    """Expression text is malformed or does not produce a real number"""

    pass


class DegenerateConversionError(DomainException):
    """Conversion has no finite answer (e.g. gain inverse at a zero rate)"""

    pass


class RateSourceError(DomainException):
    """Exchange-rate source returned an error or an unexpected document"""

    pass


class CorruptedSettingError(DomainException):
    """A persisted value is present but cannot be parsed"""

    def __init__(self, key: str, value: str):
        super().__init__(f"Stored value {value!r} for key {key!r} is not a number")
        self.key = key
        self.value = value


class UnknownFieldError(DomainException):
    """Event refers to a field that does not exist"""

    pass


class ReadOnlyFieldError(DomainException):
    """Event tries to focus or edit a display-only field"""

    pass
