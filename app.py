"""
Sicilia - Sicilian Vocabulary Trainer

Streamlit application for learning Sicilian words with Japanese meanings:
flashcards, multiple-choice quizzes and an AI tutor.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from sicilia.config import Settings
from sicilia.entitlement import Entitlement, RevenueCatProvider, StaticEntitlementProvider
from sicilia.errors import (
    EntitlementError,
    InsufficientPoolError,
    StorageError,
    SyncError,
    TutorError,
)
from sicilia.progress import ProgressSync
from sicilia.quiz import QUESTION_COUNTS, QuizSession
from sicilia.schemas import QuizPhase
from sicilia.store import CatalogStore
from sicilia.tutor import TutorClient, TutorConversation
from sicilia.viewer import (
    get_quiz_css,
    render_quiz_prompt,
    render_quiz_review,
    render_quiz_score,
)


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="Sicilia",
    page_icon="🍋",
    layout="centered",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def build_entitlement(settings: Settings) -> Entitlement:
    """Use RevenueCat when configured, otherwise a local free-tier provider."""
    if settings.revenuecat_api_key:
        provider = RevenueCatProvider(
            api_key=settings.revenuecat_api_key,
            app_user_id=settings.revenuecat_app_user_id,
        )
    else:
        provider = StaticEntitlementProvider(is_pro=False)
    return Entitlement(provider)


def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        st.session_state.settings = Settings.from_env()

    settings = st.session_state.settings

    if "store" not in st.session_state:
        store = CatalogStore(settings.db_path, seed_path=settings.seed_path)
        try:
            store.initialize()
        except StorageError as e:
            logger.error(f"Catalog initialization failed: {e}")
        st.session_state.store = store

    if "entitlement" not in st.session_state:
        entitlement = build_entitlement(settings)
        entitlement.refresh()
        st.session_state.entitlement = entitlement

    if "sync" not in st.session_state:
        st.session_state.sync = ProgressSync(st.session_state.store)

    if "quiz" not in st.session_state:
        st.session_state.quiz = QuizSession()

    if "conversation" not in st.session_state:
        st.session_state.conversation = TutorConversation()

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "vocabulary"  # vocabulary, quiz, tutor


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with progress, plan status and view selector."""
    st.sidebar.title("🍋 Sicilia")

    entitlement = st.session_state.entitlement
    sync = st.session_state.sync
    total = len(sync.entries)

    st.sidebar.markdown(f"**Learned:** {sync.learned_count}/{total}")
    st.sidebar.progress(sync.learned_count / total if total else 0.0)

    st.sidebar.divider()

    if entitlement.is_pro:
        st.sidebar.success("Pro: all words unlocked")
    else:
        st.sidebar.info("Free plan")
        if st.sidebar.button("Upgrade to Pro", use_container_width=True):
            try:
                entitlement.purchase()
                st.rerun()
            except EntitlementError as e:
                st.sidebar.error(f"Purchase failed: {e}")

    st.sidebar.divider()

    modes = ["vocabulary", "quiz", "tutor"]
    view_mode = st.sidebar.radio(
        "View",
        ["Vocabulary", "Quiz", "Tutor"],
        index=modes.index(st.session_state.view_mode),
    )
    st.session_state.view_mode = view_mode.lower()


# -----------------------------------------------------------------------------
# Vocabulary View
# -----------------------------------------------------------------------------

def render_vocabulary_view():
    """Render the word list with learned toggles."""
    st.title("単語学習")
    sync = st.session_state.sync

    # Shown once, on the run after the failed toggle
    error = sync.pop_error()
    if error:
        st.warning(str(error))

    if not sync.entries:
        st.info("No words available yet.")
        return

    for entry in sync.entries:
        col1, col2, col3 = st.columns([3, 4, 2])
        with col1:
            st.markdown(f"**{entry.item.word}**")
        with col2:
            st.markdown(entry.item.meaning)
        with col3:
            label = "✓ Learned" if entry.learned else "Learn"
            if st.button(label, key=f"learn_{entry.id}", use_container_width=True):
                try:
                    sync.toggle(entry.id)
                except SyncError:
                    pass
                st.rerun()


# -----------------------------------------------------------------------------
# Quiz View
# -----------------------------------------------------------------------------

def render_quiz_view():
    """Render the quiz in its current phase."""
    st.title("クイズ")
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    quiz = st.session_state.quiz
    if quiz.phase == QuizPhase.CONFIGURING:
        render_quiz_configuring(quiz)
    elif quiz.phase == QuizPhase.ANSWERING:
        render_quiz_answering(quiz)
    else:
        render_quiz_reviewing(quiz)


def render_quiz_configuring(quiz: QuizSession):
    count = st.radio("Questions", QUESTION_COUNTS, horizontal=True)
    if quiz.last_error:
        st.error(str(quiz.last_error))

    if st.button("Start", type="primary", use_container_width=True):
        pool = [entry.item for entry in st.session_state.sync.entries]
        try:
            quiz.start(pool, count)
        except InsufficientPoolError:
            pass
        st.rerun()


def render_quiz_answering(quiz: QuizSession):
    question = quiz.current_question
    answered, total = quiz.progress

    st.markdown(f"Question {answered + 1} of {total}")
    st.progress(answered / total)
    st.markdown(render_quiz_prompt(question.prompt), unsafe_allow_html=True)

    for idx, choice in enumerate(question.choices):
        if st.button(choice, key=f"choice_{answered}_{idx}", use_container_width=True):
            quiz.answer(idx)
            st.rerun()


def render_quiz_reviewing(quiz: QuizSession):
    result = quiz.result()
    st.markdown(render_quiz_score(result), unsafe_allow_html=True)
    st.markdown(render_quiz_review(result), unsafe_allow_html=True)

    if st.button("Try again", type="primary", use_container_width=True):
        quiz.reset()
        st.rerun()


# -----------------------------------------------------------------------------
# Tutor View
# -----------------------------------------------------------------------------

def render_tutor_view():
    """Render the AI tutor chat."""
    st.title("AIに相談")
    settings = st.session_state.settings
    conversation = st.session_state.conversation

    if not settings.groq_api_key:
        st.warning("Set GROQ_API_KEY to chat with the tutor.")

    for message in conversation.visible_messages():
        with st.chat_message(message.role):
            st.markdown(message.content)

    text = st.chat_input("Ask the tutor", disabled=not settings.groq_api_key)
    if text:
        try:
            client = TutorClient.from_settings(settings)
            with st.spinner("..."):
                conversation.send(client, text)
        except TutorError as e:
            st.error(str(e))
            return
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()

    # Re-read entitlement and the visible tier on every rerun (screen focus)
    entitlement = st.session_state.entitlement.refresh()
    st.session_state.sync.load(entitlement.is_pro)

    render_sidebar()

    if st.session_state.view_mode == "vocabulary":
        render_vocabulary_view()
    elif st.session_state.view_mode == "quiz":
        render_quiz_view()
    elif st.session_state.view_mode == "tutor":
        render_tutor_view()


if __name__ == "__main__":
    main()
