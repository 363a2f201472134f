"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment area rules that span several
    entities or need repositories.
    """

    pass
