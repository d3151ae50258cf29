"""Domain service base."""


class Service:
    """Marker base for domain services.

    Services hold the provisioning rules (who is pending, who is a member,
    what a token may carry) and talk to the outside only through ports.
    """
