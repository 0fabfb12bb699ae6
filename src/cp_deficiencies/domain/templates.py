"""Built-in deficiency templates offered to reviewers."""

from dataclasses import asdict, dataclass

from src.cp_common.enums import DeficiencyCategory, DeficiencySeverity


@dataclass(frozen=True)
class DeficiencyTemplate:
    category: DeficiencyCategory
    severity: DeficiencySeverity
    description: str
    required_action: str

    def as_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["category"] = self.category.value
        data["severity"] = self.severity.value
        return data


TEMPLATES: tuple[DeficiencyTemplate, ...] = (
    DeficiencyTemplate(
        DeficiencyCategory.COVERAGE_AMOUNT,
        DeficiencySeverity.HIGH,
        "General liability coverage is below the required minimum",
        "Increase general liability limits to meet the project requirements",
    ),
    DeficiencyTemplate(
        DeficiencyCategory.EXPIRED_POLICY,
        DeficiencySeverity.CRITICAL,
        "One or more policies on the certificate have expired",
        "Provide a certificate showing current, unexpired policies",
    ),
    DeficiencyTemplate(
        DeficiencyCategory.MISSING_ADDITIONAL_INSURED,
        DeficiencySeverity.HIGH,
        "Required parties are not listed as additional insured",
        "Add the general contractor and owner as additional insured by endorsement",
    ),
    DeficiencyTemplate(
        DeficiencyCategory.MISSING_ENDORSEMENT,
        DeficiencySeverity.MEDIUM,
        "Waiver of subrogation endorsement is missing",
        "Provide the waiver of subrogation endorsement",
    ),
    DeficiencyTemplate(
        DeficiencyCategory.CERTIFICATE_HOLDER,
        DeficiencySeverity.LOW,
        "Certificate holder name or address is incorrect",
        "Reissue the certificate with the correct certificate holder",
    ),
)
