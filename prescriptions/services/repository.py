"""
Dépôt générique pour les entités du catalogue.

Chaque entité (maladies, médicaments, produits, thérapies, constats,
ordonnances types) déclare ses colonnes cherchables, ses colonnes triables et
sa clé naturelle ; la recherche, la pagination, la mise à jour partielle,
l'upsert et l'import en lot sont écrits une seule fois ici.
"""

import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import String, func, or_, type_coerce
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import JSONEncodedList

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Colonnes gérées par la base, jamais écrites depuis une requête
READ_ONLY_COLUMNS = {"id", "created_at", "updated_at"}


class EntityRepository(Generic[ModelT]):
    """
    Opérations CRUD et recherche pour un modèle SQLAlchemy.

    :param model: La classe de modèle.
    :param searchable_fields: Colonnes autorisées dans le paramètre 'fields'.
    :param default_fields: Colonnes utilisées quand 'fields' est absent ou vide.
    :param sortable_fields: Colonnes autorisées pour 'sortBy'.
    :param default_sort: Colonne de tri si 'sortBy' est absent ou non autorisé.
    :param category_column: Colonne du filtre par catégorie (None = pas de filtre).
    :param natural_key: Colonne servant à l'upsert (None = insertion simple).
    :param required_fields: Champs à renseigner pour qu'un élément importé soit valide.
    :param base_filters: Fonction renvoyant des critères toujours appliqués à la recherche.
    :param normalizer: Fonction appliquée à chaque élément importé avant écriture.
    """

    def __init__(
        self,
        model,
        *,
        searchable_fields: Sequence[str],
        default_fields: Sequence[str],
        sortable_fields: Sequence[str],
        default_sort: str,
        category_column: Optional[str] = "category",
        natural_key: Optional[str] = None,
        required_fields: Sequence[str] = (),
        base_filters: Optional[Callable[[], list]] = None,
        normalizer: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
    ):
        self.model = model
        self.searchable_fields = tuple(searchable_fields)
        self.default_fields = tuple(default_fields)
        self.sortable_fields = tuple(sortable_fields)
        self.default_sort = default_sort
        self.category_column = category_column
        self.natural_key = natural_key
        self.required_fields = tuple(required_fields)
        self.base_filters = base_filters
        self.normalizer = normalizer
        self.columns = {c.name for c in model.__table__.columns}
        self.writable_columns = self.columns - READ_ONLY_COLUMNS

    # ------------------------------------------------------------------
    # Recherche
    # ------------------------------------------------------------------
    def resolve_fields(self, fields: Optional[Iterable[str]]) -> List[str]:
        """
        Intersecte les champs demandés avec la liste autorisée ; à défaut,
        renvoie les champs par défaut.
        """
        chosen = [f for f in (fields or []) if f in self.searchable_fields]
        return chosen or list(self.default_fields)

    def resolve_sort(self, sort_by: Optional[str], sort_order: Optional[str]):
        column_name = sort_by if sort_by in self.sortable_fields else self.default_sort
        column = getattr(self.model, column_name)
        if (sort_order or "").lower() == "desc":
            return column.desc()
        return column.asc()

    def _category_criterion(self, category: str):
        column = getattr(self.model, self.category_column)
        if isinstance(column.type, JSONEncodedList):
            # Liste sérialisée en texte : correspondance sur la valeur JSON
            return type_coerce(column, String).like(f'%"{category}"%')
        return column == category

    def _text_criterion(self, query: str, fields: List[str]):
        pattern = f"%{query}%"
        return or_(*[
            type_coerce(getattr(self.model, field), String).ilike(pattern)
            for field in fields
        ])

    def search(
        self,
        db: Session,
        query: str = "",
        fields: Optional[Iterable[str]] = None,
        category: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Recherche paginée. Le filtre par catégorie est prioritaire sur le
        texte ; sans l'un ni l'autre, l'ensemble complet est renvoyé trié.

        :return: {"results": [...], "total": int, "has_more": bool}
        """
        criteria = list(self.base_filters()) if self.base_filters else []

        if category and self.category_column:
            criteria.append(self._category_criterion(category))
        elif query:
            criteria.append(self._text_criterion(query, self.resolve_fields(fields)))

        base_query = db.query(self.model).filter(*criteria)
        total = base_query.order_by(None).count()
        results = (
            base_query
            .order_by(self.resolve_sort(sort_by, sort_order), self.model.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return {
            "results": results,
            "total": total,
            "has_more": offset + limit < total,
        }

    def categories(self, db: Session) -> List[str]:
        """
        Valeurs distinctes de la colonne catégorie, triées.
        """
        if not self.category_column:
            return []
        column = getattr(self.model, self.category_column)
        if isinstance(column.type, JSONEncodedList):
            values = set()
            for (entry,) in db.query(column).all():
                values.update(entry or [])
            return sorted(values)
        rows = db.query(column).filter(column.isnot(None)).distinct().order_by(column).all()
        return [row[0] for row in rows]

    # ------------------------------------------------------------------
    # Lecture
    # ------------------------------------------------------------------
    def get(self, db: Session, entity_id: int) -> Optional[ModelT]:
        return db.query(self.model).filter(self.model.id == entity_id).first()

    def get_by_natural_key(self, db: Session, value: Any) -> Optional[ModelT]:
        if not self.natural_key or value is None:
            return None
        column = getattr(self.model, self.natural_key)
        return db.query(self.model).filter(column == value).first()

    # ------------------------------------------------------------------
    # Écriture
    # ------------------------------------------------------------------
    def clean(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Ne garde que les colonnes modifiables du modèle.
        """
        return {k: v for k, v in data.items() if k in self.writable_columns}

    def create(self, db: Session, data: Dict[str, Any], commit: bool = True) -> ModelT:
        db_obj = self.model(**self.clean(data))
        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
        return db_obj

    def apply_update(self, db_obj: ModelT, data: Dict[str, Any], replace: bool = False) -> ModelT:
        """
        Sémantique COALESCE : seules les valeurs non nulles écrasent l'existant.
        Avec 'replace', tous les champs modifiables fournis ou non sont réécrits.
        """
        values = self.clean(data)
        if replace:
            for column in self.writable_columns:
                if column == self.natural_key:
                    continue
                setattr(db_obj, column, values.get(column))
        else:
            for key, value in values.items():
                if value is not None:
                    setattr(db_obj, key, value)
        return db_obj

    def update(self, db: Session, entity_id: int, data: Dict[str, Any]) -> Optional[ModelT]:
        db_obj = self.get(db, entity_id)
        if not db_obj:
            return None

        self.apply_update(db_obj, data)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, entity_id: int) -> Optional[ModelT]:
        db_obj = self.get(db, entity_id)
        if not db_obj:
            return None

        db.delete(db_obj)
        db.commit()
        return db_obj

    def upsert(self, db: Session, data: Dict[str, Any], replace: bool = False,
               commit: bool = True) -> Tuple[ModelT, bool]:
        """
        Insère ou met à jour selon la clé naturelle.

        :return: (objet, True si créé)
        """
        existing = self.get_by_natural_key(db, data.get(self.natural_key)) if self.natural_key else None
        if existing is None:
            return self.create(db, data, commit=commit), True

        self.apply_update(existing, data, replace=replace)
        if commit:
            db.commit()
            db.refresh(existing)
        else:
            db.flush()
        return existing, False

    # ------------------------------------------------------------------
    # Import en lot
    # ------------------------------------------------------------------
    def _prepare_import_item(self, item: Any) -> Optional[Dict[str, Any]]:
        if not isinstance(item, dict):
            return None
        data = self.normalizer(dict(item)) if self.normalizer else dict(item)
        data = self.clean(data)
        for field in self.required_fields:
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                return None
        return data

    def bulk_import(self, db: Session, items: Iterable[Any], replace_existing: bool = False) -> Dict[str, int]:
        """
        Importe un lot d'éléments. Chaque élément est écrit dans son propre
        SAVEPOINT : un élément invalide ou rejeté par la base n'incrémente que
        le compteur d'erreurs.
        """
        inserted = updated = errors = 0

        for item in items:
            data = self._prepare_import_item(item)
            if data is None:
                errors += 1
                continue
            try:
                with db.begin_nested():
                    _, created = self.upsert(db, data, replace=replace_existing, commit=False)
            except SQLAlchemyError as e:
                logger.warning(f"Élément rejeté pendant l'import {self.model.__tablename__} : {e}")
                errors += 1
                continue
            if created:
                inserted += 1
            else:
                updated += 1

        db.commit()
        logger.info(
            f"Import {self.model.__tablename__} : {inserted} insérés, "
            f"{updated} mis à jour, {errors} erreurs"
        )
        return {
            "imported": inserted + updated,
            "inserted": inserted,
            "updated": updated,
            "errors": errors,
        }
