import streamlit as st
import sys
import os

# Add detectia package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from detectia.config import get_config
from detectia.gui_integration.controller import InteractionController, ConfigurationStatus
from detectia.reporting.report_builder import (
    evidence_frame,
    false_positive_frame,
    generate_json_report,
    generate_markdown_report,
    module_table_frame,
    verdict_card_html,
)

# Page config
st.set_page_config(
    page_title="detectIA",
    page_icon="🎓",
    layout="centered",
    initial_sidebar_state="collapsed"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.5rem;
        font-weight: bold;
        text-align: center;
        margin-bottom: 0.25rem;
    }
    .ia-text {
        color: #2563eb;
    }
    .subtitle {
        color: #6b7280;
        text-align: center;
        margin-bottom: 2rem;
    }
    .section-label {
        color: #6b7280;
        font-size: 0.75rem;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        margin-bottom: 0.5rem;
    }
</style>
""", unsafe_allow_html=True)

# Initialize session state; the controller is mounted exactly once per session
if 'controller' not in st.session_state:
    controller = InteractionController.from_config(get_config())
    controller.mount()
    st.session_state.controller = controller
if 'pending_submit' not in st.session_state:
    st.session_state.pending_submit = False

controller = st.session_state.controller
labels = {
    "en": {
        "title": "Academic Text Analyzer",
        "intro": "Paste academic content below to estimate the probability that it was generated by an artificial intelligence.",
        "placeholder": "Type or paste your text here...",
        "characters": "characters",
        "analyze": "Analyze Content",
        "analyzing": "Analyzing...",
        "clear": "Clear",
    },
    "es": {
        "title": "Analizador de Texto Académico",
        "intro": "Pega el contenido académico a continuación para evaluar la probabilidad de que haya sido generado por una inteligencia artificial.",
        "placeholder": "Escribe o pega tu texto aquí...",
        "characters": "caracteres",
        "analyze": "Analizar Contenido",
        "analyzing": "Analizando...",
        "clear": "Limpiar",
    },
}[controller.language]


def render_configuration_error():
    """Fixed remediation view shown instead of the form."""
    help_text = controller.configuration_help()
    st.error(f"**{help_text['title']}**")
    st.markdown(help_text['body'])
    st.info(help_text['action'])


def render_result(result):
    """Render one AnalysisResult."""
    st.markdown(verdict_card_html(result), unsafe_allow_html=True)

    st.progress(min(max(result.probability / 100.0, 0.0), 1.0))

    st.markdown('<p class="section-label">Justification</p>', unsafe_allow_html=True)
    st.markdown(result.justification)

    if result.module_table:
        st.markdown("---")
        st.markdown("### Modules")
        st.dataframe(module_table_frame(result), use_container_width=True, hide_index=True)

    if result.module_details:
        st.markdown("### Module Analysis")
        for detail in result.module_details:
            with st.expander(f"{detail.module} · {detail.score:.0f} · {detail.contribution}"):
                st.markdown(detail.analysis)

    if result.top_evidences:
        st.markdown("---")
        st.markdown("### Top Evidence")
        for evidence in result.top_evidences:
            st.markdown(f"> {evidence.quote}")
            st.caption(f"{evidence.indicator} ({evidence.impact})")

    if result.false_positives:
        st.markdown("### False-Positive Checks")
        st.dataframe(false_positive_frame(result), use_container_width=True, hide_index=True)

    st.markdown("---")
    st.markdown('<p class="section-label">Final Calculation</p>', unsafe_allow_html=True)
    st.markdown(result.final_calculation)
    st.markdown('<p class="section-label">Recommendation</p>', unsafe_allow_html=True)
    st.markdown(result.recommendation)

    col1, col2, col3 = st.columns([1, 1, 2])
    with col1:
        st.download_button(
            label="Export JSON",
            data=generate_json_report(result),
            file_name="detectia_result.json",
            mime="application/json"
        )
    with col2:
        st.download_button(
            label="Export Markdown",
            data=generate_markdown_report(result),
            file_name="detectia_result.md",
            mime="text/markdown"
        )


if controller.status is ConfigurationStatus.UNCONFIGURED:
    render_configuration_error()
    st.stop()

# Header
st.markdown('<div class="main-header">detect<span class="ia-text">IA</span></div>', unsafe_allow_html=True)
st.markdown(f'<div class="subtitle">{labels["intro"]}</div>', unsafe_allow_html=True)
st.markdown(f"### {labels['title']}")

state = controller.state
busy = state.loading or st.session_state.pending_submit

text = st.text_area(
    "Text",
    value=state.input_text,
    placeholder=labels["placeholder"],
    height=260,
    disabled=busy,
    label_visibility="collapsed"
)
if not busy and text != state.input_text:
    state = controller.set_input(text)

st.caption(f"{state.character_count} {labels['characters']}")

col_btn1, col_btn2, col_btn3 = st.columns([1, 1, 3])

with col_btn1:
    analyze_button = st.button(
        labels["analyzing"] if busy else labels["analyze"],
        type="primary",
        disabled=busy or not state.can_submit,
        use_container_width=True
    )

with col_btn2:
    clear_button = False
    if state.can_clear and not busy:
        clear_button = st.button(labels["clear"], use_container_width=True)

if analyze_button:
    # Rerun first so the form renders disabled while the request is in flight
    st.session_state.pending_submit = True
    st.rerun()

if clear_button:
    controller.clear()
    st.rerun()

if st.session_state.pending_submit:
    with st.spinner(labels["analyzing"]):
        try:
            controller.submit()
        finally:
            st.session_state.pending_submit = False
    st.rerun()

if state.error:
    st.error(f"Error: {state.error}")

if state.result:
    render_result(state.result)
