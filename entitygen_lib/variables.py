import re
from typing import Dict, Mapping

PASCAL_KEY = "EntityName"
CAMEL_KEY = "entityName"
UPPER_KEY = "ENTITY_NAME"
KEBAB_KEY = "entity-name"

VARIABLE_KEYS = (PASCAL_KEY, CAMEL_KEY, UPPER_KEY, KEBAB_KEY)

_UPPERCASE_PATTERN = re.compile(r"([A-Z])")


def to_pascal(name: str) -> str:
    # Only position 0 is touched; "userProfile" -> "UserProfile", "order" -> "Order"
    return (name[:1].upper() + name[1:]) if name else name


def to_camel(name: str) -> str:
    return (name[:1].lower() + name[1:]) if name else name


def to_upper(name: str) -> str:
    # No word boundaries are inserted: "UserProfile" -> "USERPROFILE"
    return name.upper()


def to_kebab(name: str) -> str:
    if not name:
        return name
    dashed = _UPPERCASE_PATTERN.sub(r"-\1", name)
    return dashed.lstrip("-").lower()


def derive_variables(entity_name: str) -> Dict[str, str]:
    """
    Build the variable set for one generation run.

    The result always holds exactly the four keys in VARIABLE_KEYS. An empty
    entity name yields four empty strings.

    Example:
    derive_variables("UserProfile") ->
      {"EntityName": "UserProfile", "entityName": "userProfile",
       "ENTITY_NAME": "USERPROFILE", "entity-name": "user-profile"}
    """
    name = entity_name or ""
    return {
        PASCAL_KEY: to_pascal(name),
        CAMEL_KEY: to_camel(name),
        UPPER_KEY: to_upper(name),
        KEBAB_KEY: to_kebab(name),
    }


def placeholder(key: str) -> str:
    return "{{" + key + "}}"


def render(text: str, variables: Mapping[str, str]) -> str:
    """
    Replace every {{Key}} token whose key is in variables with its value.

    Tokens are matched literally and case-sensitively; unknown tokens such as
    {{Other}} or {{ EntityName }} are left untouched.
    """
    result = text
    for key, value in variables.items():
        result = result.replace(placeholder(key), value)
    return result
