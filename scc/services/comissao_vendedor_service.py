import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from scc.db import transaction
from scc.errors import NotFoundError
from scc.models import ComissaoVendedor, Filial, Vendedor
from scc.repositories import ComissaoVendedorRepository, VendedoresRepository
from scc.schemas.vendedor import ComissaoVendedorIn

logger = logging.getLogger("uvicorn")


def _comissao_dict(comissao: ComissaoVendedor, vendedor: Optional[Vendedor], filial: Optional[Filial]) -> Dict[str, Any]:
    return {
        "id": comissao.id,
        "codvendedor": comissao.codvendedor,
        "codloja": comissao.codloja,
        "percentual_base": float(comissao.percentual_base or 0),
        "percentual_extra": float(comissao.percentual_extra or 0),
        "meta_mensal": float(comissao.meta_mensal or 0),
        "ativo": comissao.ativo,
        "data_inicio": comissao.data_inicio,
        "data_fim": comissao.data_fim,
        "observacoes": comissao.observacoes,
        "created_at": comissao.created_at,
        "updated_at": comissao.updated_at,
        "vendedor": vendedor.vendedor if vendedor else None,
        "nome_completo": vendedor.nome_completo if vendedor else None,
        "loja": filial.c_filial if filial else None,
    }


class ComissaoVendedorService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ComissaoVendedorRepository(db)
        self.vendedores = VendedoresRepository(db)

    def list_vendedores(self) -> List[Vendedor]:
        return self.vendedores.list()

    def list_lojas(self) -> List[Dict[str, str]]:
        return [{"codloja": f.c_codigo, "loja": f.c_filial} for f in self.vendedores.list_lojas()]

    def list(self) -> List[Dict[str, Any]]:
        return [_comissao_dict(*row) for row in self.repo.list_joined()]

    def get(self, id: int) -> Dict[str, Any]:
        row = self.repo.get_joined(id)
        if not row:
            raise NotFoundError("Comissão não encontrada")
        return _comissao_dict(*row)

    def create(self, dados: ComissaoVendedorIn) -> Dict[str, Any]:
        with transaction(self.db):
            comissao = self.repo.create(dados)
            comissao_id = comissao.id
        logger.info(f"Comissão {comissao_id} criada para o vendedor {dados.codvendedor}")
        return self.get(comissao_id)

    def update(self, id: int, dados: ComissaoVendedorIn) -> Dict[str, Any]:
        """Substitui todos os campos editáveis da comissão."""
        with transaction(self.db):
            comissao = self.repo.get(id)
            if not comissao:
                raise NotFoundError("Comissão não encontrada")
            self.repo.update(comissao, dados.model_dump())
        return self.get(id)

    def delete(self, id: int) -> None:
        with transaction(self.db):
            if not self.repo.delete(id):
                raise NotFoundError("Comissão não encontrada")
        logger.info(f"Comissão {id} excluída")
