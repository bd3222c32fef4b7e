from .common import NEW_PERSON_MARKER, PersonRole, ResolutionStatus  # noqa: F401
from .people import PersonCreate, PersonResolution, PersonSummary  # noqa: F401
from .projects import ProjectCreate, ProjectRead, ProjectUpdate  # noqa: F401
