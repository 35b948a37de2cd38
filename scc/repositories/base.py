from typing import TypeVar, Generic, Type, List, Optional, Any, Dict, Sequence, Union
from sqlalchemy.orm import Session
from sqlalchemy.dialects import postgresql, sqlite
from pydantic import BaseModel

# Tipo genérico para modelos SQLAlchemy
ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """
    Repositório base com operações CRUD genéricas.

    Os métodos não confirmam a transação: apenas enviam as alterações para a
    sessão (flush). Quem chama decide o limite da unidade de trabalho com
    scc.db.transaction.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Inicializa o repositório base.

        Args:
            model: Classe do modelo SQLAlchemy
            db: Sessão do banco de dados
        """
        self.model = model
        self.db = db

    def get(self, pk: Any) -> Optional[ModelType]:
        """
        Obtém um registro pela chave primária.

        Args:
            pk: Valor da chave (tupla para chaves compostas)

        Returns:
            Instância do modelo ou None se não encontrado
        """
        return self.db.get(self.model, pk)

    def get_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def create(self, obj_in: Union[BaseModel, Dict[str, Any]]) -> ModelType:
        """
        Cria um novo registro.

        Args:
            obj_in: Dados para criar o registro (esquema Pydantic ou dicionário)

        Returns:
            Instância do modelo criado, já com a chave gerada
        """
        obj_data = obj_in.model_dump() if hasattr(obj_in, "model_dump") else obj_in
        db_obj = self.model(**obj_data)
        self.db.add(db_obj)
        self.db.flush()
        self.db.refresh(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Union[BaseModel, Dict[str, Any]]) -> ModelType:
        """
        Aplica uma atualização parcial em um registro carregado.

        Apenas os campos enviados (exclude_unset) são alterados.
        """
        obj_data = obj_in.model_dump(exclude_unset=True) if hasattr(obj_in, "model_dump") else obj_in
        for field, value in obj_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        self.db.add(db_obj)
        self.db.flush()
        self.db.refresh(db_obj)
        return db_obj

    def delete(self, pk: Any) -> bool:
        """
        Remove um registro.

        Returns:
            True se o registro foi removido, False caso contrário
        """
        db_obj = self.get(pk)
        if not db_obj:
            return False
        self.db.delete(db_obj)
        self.db.flush()
        return True

    def upsert(self, values: Dict[str, Any], index_elements: Sequence[str]) -> None:
        """
        INSERT ... ON CONFLICT DO UPDATE conforme o dialeto da conexão.

        Args:
            values: Colunas e valores da linha
            index_elements: Colunas da restrição única usada no conflito
        """
        dialect = self.db.get_bind().dialect.name
        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        stmt = insert(self.model.__table__).values(**values)
        update_cols = {k: stmt.excluded[k] for k in values if k not in index_elements}
        if update_cols:
            stmt = stmt.on_conflict_do_update(index_elements=list(index_elements), set_=update_cols)
        else:
            stmt = stmt.on_conflict_do_nothing(index_elements=list(index_elements))
        self.db.flush()
        self.db.execute(stmt)
        self.db.expire_all()

    def count(self) -> int:
        return self.db.query(self.model).count()
