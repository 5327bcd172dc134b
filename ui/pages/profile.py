import streamlit as st

from services.profile_service import ProfileService
from ui.notifications import notify
from ui.state import get_rest_client, get_session_provider

STATE_KEY = "page_state:perfil"
TIPOS = ["", "consultor", "empresa"]


def render() -> None:
    st.title("👤 Meu perfil")
    svc = ProfileService(get_rest_client(), get_session_provider(), notify=notify)

    if STATE_KEY not in st.session_state:
        with st.spinner("Carregando perfil..."):
            st.session_state[STATE_KEY] = svc.load()
    profile = st.session_state[STATE_KEY]
    if profile is None:
        st.warning("Perfil indisponível.")
        return

    col_avatar, col_info = st.columns([1, 4])
    with col_avatar:
        if profile.avatar_url:
            st.image(profile.avatar_url, width=96)
        else:
            st.markdown(f"<h1 style='text-align:center'>{profile.initial}</h1>", unsafe_allow_html=True)
    with col_info:
        st.markdown(f"**{profile.nome or 'Sem nome'}**")
        st.caption(f"✉️ {profile.email}")
        if profile.tipo:
            icon = "🏢" if profile.tipo.lower() == "empresa" else "💼"
            st.caption(f"{icon} {profile.tipo.capitalize()}")

    tipos = TIPOS if profile.tipo in TIPOS else TIPOS + [profile.tipo]
    with st.form("profile_form"):
        nome = st.text_input("Nome", value=profile.nome)
        tipo = st.selectbox(
            "Tipo",
            tipos,
            index=tipos.index(profile.tipo),
            format_func=lambda t: t.capitalize() if t else "Não informado",
        )
        bio = st.text_area("Bio", value=profile.bio)
        avatar_url = st.text_input("URL do avatar", value=profile.avatar_url)
        submitted = st.form_submit_button("💾 Salvar")

    if submitted:
        profile.nome, profile.tipo, profile.bio, profile.avatar_url = nome, tipo, bio, avatar_url
        if svc.save(profile):
            # recharge depuis la base
            del st.session_state[STATE_KEY]
            st.rerun()
