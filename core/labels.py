"""
Tables statiques code → libellé.

Une énumération par domaine : chaque membre porte son code et son libellé,
un code ne peut donc pas exister sans libellé. Les codes inconnus renvoyés
par la base s'affichent sous la forme "<Catégorie> <code>".
"""

from enum import Enum, unique
from typing import Optional, Type, Union

Code = Union[str, int]


class LabeledEnum(Enum):
    def __init__(self, code: str, label: str):
        self.code = code
        self.label = label

    @classmethod
    def normalize(cls, code: Code) -> str:
        return str(code).strip()

    @classmethod
    def from_code(cls, code: Code):
        wanted = cls.normalize(code)
        for member in cls:
            if member.code == wanted:
                return member
        return None


class PaddedCodeEnum(LabeledEnum):
    """Codes numériques sur deux chiffres ("2" et "02" désignent le même code)."""

    @classmethod
    def normalize(cls, code: Code) -> str:
        raw = str(code).strip()
        return raw.zfill(2) if raw.isdigit() else raw


@unique
class SituacaoCadastral(PaddedCodeEnum):
    NULA = ("01", "Nula")
    ATIVA = ("02", "Ativa")
    SUSPENSA = ("03", "Suspensa")
    INAPTA = ("04", "Inapta")
    BAIXADA = ("08", "Baixada")


@unique
class PorteEmpresa(PaddedCodeEnum):
    NAO_INFORMADO = ("00", "Não informado")
    MICROEMPRESA = ("01", "Microempresa")
    EPP = ("03", "Empresa de Pequeno Porte")
    DEMAIS = ("05", "Demais")


@unique
class TenderStatus(LabeledEnum):
    ABERTA = ("aberta", "Aberta")
    ENCERRADA = ("encerrada", "Encerrada")
    SUSPENSA = ("suspensa", "Suspensa")
    EM_ANDAMENTO = ("em andamento", "Em andamento")

    @classmethod
    def normalize(cls, code: Code) -> str:
        return str(code).strip().lower()


CATEGORY_NAMES = {
    SituacaoCadastral: "Situação",
    PorteEmpresa: "Porte",
    TenderStatus: "Status",
}


def label_for(enum_cls: Type[LabeledEnum], code: Optional[Code]) -> Optional[str]:
    if code is None or str(code).strip() == "":
        return None
    member = enum_cls.from_code(code)
    if member is not None:
        return member.label
    return f"{CATEGORY_NAMES[enum_cls]} {code}"


def tender_status_label(status: Optional[str]) -> str:
    """Statut d'appel d'offres ; un statut inconnu est simplement capitalisé."""
    if not status:
        return ""
    member = TenderStatus.from_code(status)
    if member is not None:
        return member.label
    return status[:1].upper() + status[1:]
