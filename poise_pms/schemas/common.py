from enum import Enum


class PersonRole(str, Enum):
    CUSTOMER = "Customer"
    ARCHITECT = "Architect"
    PROJECT_MANAGER = "ProjectManager"
    CONTRACTOR = "Contractor"

    @property
    def label(self) -> str:
        return {
            PersonRole.CUSTOMER: "Customer",
            PersonRole.ARCHITECT: "Architect",
            PersonRole.PROJECT_MANAGER: "Project Manager",
            PersonRole.CONTRACTOR: "Contractor",
        }[self]


class ResolutionStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID_FORMAT = "invalid_format"
    STORE_ERROR = "store_error"


# Typed at the "select existing or create" prompt to take the create path
NEW_PERSON_MARKER = "new"
