from typing import Dict, List

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder


def render_table(rows: List[Dict], columns: Dict[str, str], key: str, empty_message: str) -> None:
    """Tableau AgGrid en lecture seule ; `columns` associe colonne source → en-tête."""
    if not rows:
        st.caption(empty_message)
        return

    df = pd.DataFrame(rows)
    for col in columns:
        if col not in df.columns:
            df[col] = None
    display = df[list(columns.keys())].rename(columns=columns)

    gob = GridOptionsBuilder.from_dataframe(display)
    gob.configure_default_column(resizable=True, sortable=True)
    gob.configure_pagination(paginationAutoPageSize=True)
    AgGrid(
        display,
        gridOptions=gob.build(),
        height=min(80 + 35 * len(display), 400),
        fit_columns_on_grid_load=True,
        theme="balham",
        key=key,
    )
