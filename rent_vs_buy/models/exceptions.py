"""Errors raised by the projection engine."""

from typing import Any, Dict, List, Optional


class ProjectionError(ValueError):
    """Base projection error with HTTP status."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.__class__.__name__, "message": self.message}


class InvalidParameterError(ProjectionError):
    """A scenario field is negative, non-finite or out of range."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, status_code=400)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["details"] = self.errors
        return data


class NonAmortizingLoanError(ProjectionError):
    """The monthly payment never covers more than the interest."""

    def __init__(self, total_monthly_payment: float, interest_only_payment: float):
        super().__init__(
            f"Monthly payment {total_monthly_payment:.2f} does not exceed the "
            f"interest-only payment {interest_only_payment:.2f}; the loan never amortizes",
            status_code=422,
        )
        self.total_monthly_payment = total_monthly_payment
        self.interest_only_payment = interest_only_payment

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["total_monthly_payment"] = self.total_monthly_payment
        data["interest_only_payment"] = self.interest_only_payment
        return data
