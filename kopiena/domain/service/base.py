"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold taxonomy rules that span several aggregates, such
    as a suggestion, its submitter and the tags it points at.
    """

    pass
