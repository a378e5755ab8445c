from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, Sequence, Type, TypeVar
from sqlmodel import SQLModel, Session, select, func

from waman.core.errors import NotFoundError

# Type générique pour le modèle (Partner, Project, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base : le "driver" de stockage par type de ressource.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : find_many, create, update, delete, count.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 Toute erreur (lecture, commit, refresh) annule la transaction : la session
       reste utilisable pour un retry, même après une connexion invalidée.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- HELPERS ----------

    @contextmanager
    def _rollback_on_error(self) -> Iterator[None]:
        try:
            yield
        except Exception:
            self.session.rollback()
            raise

    def _commit(self, entity: Optional[ModelT] = None) -> None:
        self.session.commit()
        if entity is not None:
            self.session.refresh(entity)

    def _get_or_raise(self, id_: int) -> ModelT:
        entity = self.session.get(self.model, id_)
        if entity is None:
            raise NotFoundError(self.model.__name__, id_)
        return entity

    # ---------- READ ----------

    def find_many(
        self,
        *,
        order_by: str = "created_at",
        descending: bool = True,
        limit: int = 100,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """Liste ordonnée et plafonnée ; l'id départage les ex-aequo dans le même sens."""
        column = getattr(self.model, order_by)
        id_column = self.model.id
        if descending:
            ordering = (column.desc(), id_column.desc())
        else:
            ordering = (column.asc(), id_column.asc())
        statement = select(self.model).order_by(*ordering).offset(offset).limit(limit)
        with self._rollback_on_error():
            return self.session.exec(statement).all()

    def count(self) -> int:
        """Retourne le nombre total d'enregistrements."""
        with self._rollback_on_error():
            return self.session.exec(select(func.count(self.model.id))).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        with self._rollback_on_error():
            return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement (id attribué par la base)."""
        with self._rollback_on_error():
            entity = self.model(**fields)
            self.session.add(entity)
            self._commit(entity)
            return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Applique les changements fournis sur une entité déjà chargée."""
        with self._rollback_on_error():
            for key, value in changes.items():
                setattr(entity, key, value)
            self.session.add(entity)
            self._commit(entity)
            return entity

    def update_by_id(self, id_: int, **changes) -> ModelT:
        """Lecture + mise à jour ; NotFoundError si aucune ligne."""
        with self._rollback_on_error():
            return self.update(self._get_or_raise(id_), **changes)

    # ---------- DELETE ----------

    def delete(self, entity: ModelT) -> None:
        with self._rollback_on_error():
            self.session.delete(entity)
            self._commit()

    def delete_by_id(self, id_: int) -> None:
        """Suppression définitive par identifiant ; NotFoundError si aucune ligne."""
        with self._rollback_on_error():
            self.delete(self._get_or_raise(id_))
