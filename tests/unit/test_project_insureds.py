"""Tests for the additional-insured list of a project."""

from src.cp_projects.domain.insureds import additional_insureds_for
from src.cp_projects.infrastructure.db_models import ProjectModel


def test_gc_entity_then_extras() -> None:
    project = ProjectModel(
        name="Tower",
        gc_name="BuildCo",
        entity="Tower Owner LLC",
        additional_insureds="Lender Bank, City of Springfield",
    )
    assert additional_insureds_for(project) == [
        "BuildCo",
        "Tower Owner LLC",
        "Lender Bank",
        "City of Springfield",
    ]


def test_blanks_and_repeats_dropped() -> None:
    project = ProjectModel(
        name="Tower", gc_name="BuildCo", entity=None, additional_insureds=" ,BuildCo,, Bank "
    )
    assert additional_insureds_for(project) == ["BuildCo", "Bank"]


def test_nothing_set() -> None:
    assert additional_insureds_for(ProjectModel(name="Empty")) == []
