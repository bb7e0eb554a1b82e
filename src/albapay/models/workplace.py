from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from albapay.utils.validators import to_decimal


class PolicySelection(Enum):
    """Whether the employer pays an allowance, as confirmed by the user"""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def from_setting(cls, setting) -> "PolicySelection":
        """Map a stored allowance setting to a selection.

        Accepts the current ``{"selection": "yes" | "no" | "unknown"}`` form and
        the legacy ``{"supported": bool, "userConfirmed": bool}`` form. When both
        are present ``selection`` wins. A missing setting is UNKNOWN.
        """
        if isinstance(setting, cls):
            return setting
        if isinstance(setting, str):
            return cls(setting.lower())
        if not setting:
            return cls.UNKNOWN

        selection = setting.get('selection')
        if selection:
            return cls(str(selection).lower())

        if 'supported' not in setting and 'userConfirmed' not in setting:
            return cls.UNKNOWN
        if not setting.get('supported'):
            return cls.NO
        return cls.YES if setting.get('userConfirmed') else cls.UNKNOWN


class BreakType(Enum):
    NONE = "none"
    STANDARD = "standard"
    CUSTOM = "custom"


class DeductionScheme(Enum):
    WITHHOLDING_3_3 = "withholding3_3"
    FOUR_INSURANCE = "four_insurance"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value) -> "DeductionScheme":
        if isinstance(value, cls):
            return value
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class BreakPolicy:
    """Unpaid break granted per completed block of work"""
    kind: BreakType = BreakType.NONE
    every_hours: Decimal = Decimal('0')
    minutes_per_block: int = 0

    @classmethod
    def standard(cls) -> "BreakPolicy":
        return cls(BreakType.STANDARD, Decimal('4'), 30)

    @classmethod
    def custom(cls, every_hours, minutes_per_block) -> "BreakPolicy":
        return cls(BreakType.CUSTOM, to_decimal(every_hours), int(minutes_per_block or 0))


@dataclass(frozen=True)
class InsuranceComponent:
    enabled: bool = False
    rate: Decimal = Decimal('0')  # percent

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "InsuranceComponent":
        if not data:
            return cls()
        enabled = bool(data.get('enabled'))
        rate = to_decimal(data.get('rate'))
        return cls(enabled=enabled, rate=rate)

    def to_dict(self) -> dict:
        return {'enabled': self.enabled, 'rate': str(self.rate)}


@dataclass(frozen=True)
class InsuranceSettings:
    """Worker-borne four-insurance components.

    Occupational accident insurance is paid by the employer alone and
    has no component here.
    """
    pension: InsuranceComponent = field(default_factory=InsuranceComponent)
    health: InsuranceComponent = field(default_factory=InsuranceComponent)
    long_term_care: InsuranceComponent = field(default_factory=InsuranceComponent)
    employment: InsuranceComponent = field(default_factory=InsuranceComponent)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "InsuranceSettings":
        """Missing rates count as 0 even for enabled components"""
        data = data or {}
        return cls(
            pension=InsuranceComponent.from_dict(data.get('pension')),
            health=InsuranceComponent.from_dict(data.get('health')),
            long_term_care=InsuranceComponent.from_dict(
                data.get('longTermCare') or data.get('long_term_care')),
            employment=InsuranceComponent.from_dict(data.get('employment')),
        )

    def has_any_enabled(self) -> bool:
        return any(c.enabled for c in (self.pension, self.health, self.long_term_care, self.employment))

    def to_dict(self) -> dict:
        return {
            'pension': self.pension.to_dict(),
            'health': self.health.to_dict(),
            'longTermCare': self.long_term_care.to_dict(),
            'employment': self.employment.to_dict(),
        }


@dataclass(frozen=True)
class AllowancePolicy:
    weekly_rest: PolicySelection = PolicySelection.UNKNOWN
    night: PolicySelection = PolicySelection.UNKNOWN
    holiday: PolicySelection = PolicySelection.UNKNOWN

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AllowancePolicy":
        data = data or {}
        return cls(
            weekly_rest=PolicySelection.from_setting(
                data.get('weeklyHolidayPay') or data.get('weekly_rest')),
            night=PolicySelection.from_setting(data.get('nightPay') or data.get('night')),
            holiday=PolicySelection.from_setting(data.get('holidayPay') or data.get('holiday')),
        )

    def to_dict(self) -> dict:
        return {
            'weeklyHolidayPay': {'selection': self.weekly_rest.value},
            'nightPay': {'selection': self.night.value},
            'holidayPay': {'selection': self.holiday.value},
        }


@dataclass(frozen=True)
class WorkplaceConfig:
    """Pay configuration for one employer relationship"""
    hourly_wage: Decimal = Decimal('0')
    break_policy: BreakPolicy = field(default_factory=BreakPolicy)
    deduction_scheme: DeductionScheme = DeductionScheme.UNKNOWN
    insurance: InsuranceSettings = field(default_factory=InsuranceSettings)
    allowances: AllowancePolicy = field(default_factory=AllowancePolicy)
    id: Optional[str] = None
    name: str = ""
    color: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "WorkplaceConfig":
        """Build from the stored workplace JSON shape"""
        break_type = BreakType(data.get('breakType') or data.get('break_type') or 'none')
        if break_type is BreakType.STANDARD:
            break_policy = BreakPolicy.standard()
        elif break_type is BreakType.CUSTOM:
            break_policy = BreakPolicy.custom(
                data.get('breakEveryHours', data.get('break_every_hours')),
                data.get('breakMinutesPerBlock', data.get('break_minutes_per_block')),
            )
        else:
            break_policy = BreakPolicy()

        return cls(
            hourly_wage=to_decimal(data.get('hourlyWage', data.get('hourly_wage'))),
            break_policy=break_policy,
            deduction_scheme=DeductionScheme.from_value(data.get('taxType') or data.get('deduction_scheme')),
            insurance=InsuranceSettings.from_dict(
                data.get('insuranceSettings') or data.get('insurance')),
            allowances=AllowancePolicy.from_dict(data.get('settings')),
            id=data.get('id'),
            name=data.get('name') or "",
            color=data.get('color'),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'hourlyWage': str(self.hourly_wage),
            'breakType': self.break_policy.kind.value,
            'breakEveryHours': str(self.break_policy.every_hours),
            'breakMinutesPerBlock': self.break_policy.minutes_per_block,
            'taxType': self.deduction_scheme.value,
            'insuranceSettings': self.insurance.to_dict(),
            'settings': self.allowances.to_dict(),
        }

    def __str__(self):
        return f"Workplace({self.id}, {self.name})"
