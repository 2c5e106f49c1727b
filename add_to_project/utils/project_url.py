"""
Project URL parsing.

Accepts URLs of the form https://github.com/<orgs-or-users>/<ownerName>/projects/<projectNumber>
"""

import re
from add_to_project.config import ConfigError
from add_to_project.github.models import ProjectLocation

PROJECT_URL_PATTERN = re.compile(
    r"^(?:https://)?github\.com/(?P<owner_type>orgs|users)/(?P<owner_name>[^/]+)/projects/(?P<number>\d+)"
)

OWNER_TYPE_QUERIES = {
    "orgs": "organization",
    "users": "user",
}


def parse_project_url(url: str) -> ProjectLocation:
    """
    Parse a project URL into its owner and number.

    Raises:
        ConfigError: If the URL does not point at a project
    """
    match = PROJECT_URL_PATTERN.match(url.strip())
    if not match:
        raise ConfigError(
            f"Invalid project URL: {url}. Project URL should match the format "
            "https://github.com/<orgs-or-users>/<ownerName>/projects/<projectNumber>"
        )

    return ProjectLocation(
        owner_type=match.group("owner_type"),
        owner_name=match.group("owner_name"),
        number=int(match.group("number")),
    )


def owner_type_query(owner_type: str) -> str:
    """
    Map a URL owner segment to the GraphQL root field that looks it up.

    Raises:
        ConfigError: If the owner type is neither 'orgs' nor 'users'
    """
    query = OWNER_TYPE_QUERIES.get(owner_type)
    if query is None:
        raise ConfigError(f"Unsupported ownerType: {owner_type}. Must be one of 'orgs' or 'users'")
    return query
