"""Additional-insured list for certificates issued on a project."""

from src.cp_projects.infrastructure.db_models import ProjectModel


def additional_insureds_for(project: ProjectModel) -> list[str]:
    """GC, owner entity, then the comma-separated extras; blanks and repeats dropped."""
    candidates = [project.gc_name, project.entity]
    candidates.extend((project.additional_insureds or "").split(","))
    insureds: list[str] = []
    for name in candidates:
        name = (name or "").strip()
        if name and name not in insureds:
            insureds.append(name)
    return insureds
