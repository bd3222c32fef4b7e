# SQLModel definitions, imported here so metadata is populated for create_all.
from .base import IntegerIdMixin, TimestampMixin  # noqa: F401
from .person import Architect, Contractor, Customer, PersonBase, ProjectManager  # noqa: F401
from .project import Project  # noqa: F401
