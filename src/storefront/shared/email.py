"""Structural email address checks shared by accounts and orders."""

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    """Exactly one @, a dotted domain, no whitespace, no empty or doubled labels."""
    if not email or any(ch in email for ch in (" ", "\t", "\n")):
        return False

    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        return False

    if any(label.startswith("-") or label.endswith("-") for label in domain_part.split(".")):
        return False

    return not any(ch in email for ch in _FORBIDDEN)
