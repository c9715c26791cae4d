class ValuationError(Exception):
    """Base class for failures that end a valuation request."""


class InvalidPropertyError(ValuationError):
    """One or more input rules failed; carries every message, not just the first."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(". ".join(self.errors))


class UnknownZoneError(ValuationError):
    def __init__(self, district: str, zone: str):
        self.district = district
        self.zone = zone
        super().__init__(f"No price found for zone '{zone}' in district '{district}'")


class NegativeValuationError(ValuationError):
    """An adjustment stage drove the running valuation below zero."""

    def __init__(self, stage: str, value: float):
        self.stage = stage
        self.value = value
        super().__init__(f"Adjustment '{stage}' produced a negative valuation ({value:.2f})")


class NonFiniteValuationError(ValuationError):
    """A stage overflowed to infinity or produced NaN."""

    def __init__(self, stage: str, value: float):
        self.stage = stage
        self.value = value
        super().__init__(f"Valuation is out of range after '{stage}' ({value})")
