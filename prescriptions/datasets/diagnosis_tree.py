import json
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"


def flatten_diagnosis_hierarchy(nodes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Aplatit une arborescence de codes de diagnostic (type CIM-10) en une liste
    de maladies importables.

    Parcours en profondeur : chaque noeud possédant un 'code' et un 'desc'
    devient {code, name, description, category}. Un noeud dont le code est un
    intervalle (ex. 'A00-B99') est sa propre catégorie ; les autres héritent
    de la description de leur parent ('General' au premier niveau).
    """
    flattened: List[Dict[str, Any]] = []

    def traverse(items: List[Dict[str, Any]], parent_category: Optional[str] = None) -> None:
        for item in items:
            if not isinstance(item, dict):
                continue
            code = item.get("code")
            desc = item.get("desc")
            if code and desc:
                category = desc if "-" in str(code) else (parent_category or DEFAULT_CATEGORY)
                desc_full = item.get("desc_full")
                flattened.append({
                    "code": code,
                    "name": desc_full or desc,
                    "description": desc if desc_full else None,
                    "category": category,
                })

            children = item.get("children")
            if isinstance(children, list):
                traverse(children, desc or parent_category)

    traverse(nodes)
    return flattened


def load_disease_records(data: Any) -> List[Dict[str, Any]]:
    """
    Accepte les trois formats de fichier de maladies :
      - une liste de maladies déjà à plat,
      - une arborescence (le premier élément a une clé 'children'),
      - un objet {"diseases": [...]}.

    :raises ValueError: pour tout autre format.
    """
    if isinstance(data, list):
        if data and isinstance(data[0], dict) and "children" in data[0]:
            return flatten_diagnosis_hierarchy(data)
        return data
    if isinstance(data, dict) and isinstance(data.get("diseases"), list):
        return data["diseases"]
    raise ValueError(
        'Format JSON invalide : une liste de maladies ou un objet avec une clé "diseases" est attendu.'
    )


def read_disease_file(path: str) -> List[Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    records = load_disease_records(data)
    logger.info(f"{len(records)} maladies lues depuis {path}")
    return records
