import logging
import traceback
from typing import Callable

import streamlit as st

logger = logging.getLogger(__name__)


def render_with_boundary(render: Callable[[], None], title: str = "Oops! Algo deu errado.") -> None:
    """
    Exécute le rendu d'une page ; une exception non gérée affiche un panneau
    d'erreur statique avec un bouton de nouvel essai au lieu de faire tomber l'app.

    st.rerun / st.stop lèvent des BaseException de contrôle : elles traversent.
    """
    try:
        render()
    except Exception as e:
        logger.exception("Erreur non gérée pendant le rendu de la page")
        with st.container(border=True):
            st.error(title)
            st.write(
                "Pedimos desculpas pelo inconveniente. Tente atualizar a página "
                "ou contate o suporte se o problema persistir."
            )
            with st.expander("Detalhes do Erro"):
                st.code("".join(traceback.format_exception(type(e), e, e.__traceback__)))
            if st.button("Tentar novamente", key="error_boundary_retry"):
                st.rerun()
