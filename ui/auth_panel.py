# ui/auth_panel.py
import streamlit as st

from auth import AuthError

def full_screen_login(auth):
    st.markdown("""
    <style>
      [data-testid="stSidebar"], [data-testid="baseButton-headerNoPadding"] { display:none!important; }
      .main > div { padding-top: 6vh !important; }
    </style>
    """, unsafe_allow_html=True)
    _, col, _ = st.columns([1, 2.2, 1])
    with col:
        st.markdown("<h1 style='text-align:center;'>👥 TRAWORK</h1>", unsafe_allow_html=True)
        tab_in, tab_up = st.tabs(["Sign in", "Sign up"])
        with tab_in:
            with st.form("login_form", clear_on_submit=False):
                email = st.text_input("Email address", placeholder="you@example.com")
                password = st.text_input("Password", type="password")
                submitted = st.form_submit_button("Sign in", use_container_width=True)
            if submitted:
                if not email or not password:
                    st.warning("Please enter your email and password.")
                else:
                    try:
                        auth.sign_in_with_password(email, password)
                    except AuthError as e:
                        st.error(str(e))
                    else:
                        st.rerun()
        with tab_up:
            with st.form("signup_form", clear_on_submit=False):
                email = st.text_input("Email address", placeholder="you@example.com", key="su_email")
                password = st.text_input("Create a password", type="password", key="su_password")
                submitted = st.form_submit_button("Sign up", use_container_width=True)
            if submitted:
                try:
                    auth.sign_up(email, password)
                except AuthError as e:
                    st.error(str(e))
                else:
                    st.rerun()
