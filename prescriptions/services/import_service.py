import json
import logging
from typing import Any, List, Tuple

logger = logging.getLogger(__name__)


def parse_import_payload(raw: bytes, collection_key: str) -> Tuple[List[Any], bool]:
    """
    Extrait la liste d'éléments et l'option de remplacement d'un corps de
    requête d'import.

    Formes acceptées : un tableau nu, {"items": [...]} ou
    {"<collection_key>": [...]}, avec 'replace_existing' ou 'replaceExisting'.
    Un corps illisible donne une liste vide au lieu d'une erreur.
    """
    if not raw:
        return [], False
    try:
        parsed = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.warning("Corps d'import illisible ; poursuite avec une liste vide")
        return [], False

    if isinstance(parsed, list):
        return parsed, False
    if not isinstance(parsed, dict):
        return [], False

    items = parsed.get("items")
    if not isinstance(items, list):
        items = parsed.get(collection_key)
    if not isinstance(items, list):
        items = []

    replace = parsed.get("replace_existing", parsed.get("replaceExisting", False))
    return items, bool(replace)
