import logging

import streamlit as st

from src.ui.layout import render_dashboard

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def main() -> None:
    st.set_page_config(
        page_title="Hashrate Heating Audit",
        layout="wide",
    )
    render_dashboard()


if __name__ == "__main__":
    main()
