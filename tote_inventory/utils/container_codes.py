"""Container code derivation from human-entered names like "Bin #7"."""

import re
from dataclasses import dataclass

NUMBERED_NAME_PATTERN = re.compile(r"^(.*?)\s*#(\d+)", re.IGNORECASE)
FALLBACK_TYPE = "Container"


@dataclass(frozen=True)
class ParsedContainerName:
    type: str
    code: str
    label: str


def parse_container_name(name: str) -> ParsedContainerName:
    """Derive the type tag and code for a container name.

    ``"Book Box #1"`` becomes type ``"Book Box"`` and code ``"BOOKBOX-01"``.
    Names without a type before ``#<digits>`` fall back to the whole name as
    the code, with every run of non-alphanumeric characters collapsed into one dash.
    """
    label = name.strip()
    match = NUMBERED_NAME_PATTERN.match(label)
    type_name = match.group(1).strip() if match else ""
    if match and type_name:
        number = match.group(2)
        type_tag = re.sub(r"\s+", "", type_name).upper()
        return ParsedContainerName(
            type=type_name,
            code=f"{type_tag}-{number.zfill(2)}",
            label=label,
        )

    return ParsedContainerName(
        type=FALLBACK_TYPE, code=normalize_code(label), label=label
    )


def normalize_code(value: str) -> str:
    """Upper-case a free-form value into a dash separated code."""
    return re.sub(r"[^A-Z0-9]+", "-", value.upper()).strip("-")


def code_prefix(code: str) -> str:
    """Part of a code before its first dash."""
    return code.split("-", 1)[0]
