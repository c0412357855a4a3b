"""
AI Assistant tab: chat transcript, text and voice input, part photo scanning.
"""

import time

import streamlit as st
from streamlit_mic_recorder import speech_to_text

from loomspares.agents.assistant import get_assistant
from loomspares.config import Config
from loomspares.models import Message, MessageRole
from loomspares.tools.image_tools import recognize_parts
from loomspares.ui.product_display import render_product_grid
from loomspares.ui.state import get_catalog

SAMPLE_QUESTIONS = [
    {"question": "Show me Toyota spares", "icon": "🏭"},
    {"question": "Parts under ₹500", "icon": "💰"},
    {"question": "What is the stock availability?", "icon": "📦"},
    {"question": "How long does delivery take?", "icon": "🚚"},
]


def render_chat_interface():
    """Render the assistant chat with voice input and part scanning."""

    st.subheader("🤖 AI Voice Assistant")

    # Sample questions (only while the transcript holds just the greeting)
    if len(st.session_state.messages) <= 1:
        st.markdown("##### 💡 Try these questions:")
        cols = st.columns(len(SAMPLE_QUESTIONS))
        for idx, (col, q) in enumerate(zip(cols, SAMPLE_QUESTIONS)):
            with col:
                if st.button(f"{q['icon']} {q['question']}", key=f"sample_q_{idx}",
                             use_container_width=True):
                    st.session_state.selected_question = q['question']
                    st.rerun()

    # Handle sample question selection
    if "selected_question" in st.session_state:
        prompt = st.session_state.selected_question
        del st.session_state.selected_question
        process_user_query(prompt)

    # Display transcript
    for message in st.session_state.messages:
        render_message(message)

    voice_col, photo_col = st.columns([1, 3])
    with voice_col:
        transcript = speech_to_text(
            language=Config.SPEECH_LANGUAGE,
            start_prompt="🎙️ Speak",
            stop_prompt="⏹️ Stop listening",
            just_once=True,
            use_container_width=True,
            key="voice_input"
        )
    with photo_col:
        render_part_scanner()

    if transcript:
        process_user_query(transcript)

    # Chat input
    if prompt := st.chat_input("Type your message or use voice..."):
        process_user_query(prompt)


def render_message(message: Message):
    avatar = "🤖" if message.role == MessageRole.ASSISTANT else "👤"
    with st.chat_message(message.role.value, avatar=avatar):
        st.markdown(message.content)
        st.caption(message.timestamp.strftime("%I:%M:%S %p"))

        if message.recommendations:
            render_product_grid(message.recommendations, f"msg_{message.id}", columns=2)

        if message.steps:
            with st.expander("🧠 Show Thinking Process"):
                for step in message.steps:
                    st.text(step)


def render_part_scanner():
    with st.popover("📷 Identify a part", use_container_width=True):
        # Nonce in the key resets the uploader after each scan
        uploaded = st.file_uploader(
            "Upload a photo of the spare",
            type=["png", "jpg", "jpeg", "webp"],
            key=f"part_photo_{st.session_state.uploader_nonce}"
        )
        if uploaded is not None:
            st.image(uploaded, width=160)
            if st.button("🔎 Scan part", key="scan_part", use_container_width=True):
                process_part_photo(uploaded.name, uploaded.getvalue())


def process_part_photo(file_name: str, image: bytes):
    """Simulated recognition: wait, then suggest the first catalog entries."""
    st.session_state.messages.append(Message(
        role=MessageRole.USER,
        content=f"📷 Uploaded part photo: {file_name}"
    ))

    with st.spinner("🔎 Analyzing image..."):
        time.sleep(Config.IMAGE_SCAN_DELAY)
        matches = recognize_parts(image, get_catalog().list_products())

    st.session_state.messages.append(Message(
        role=MessageRole.ASSISTANT,
        content=get_assistant().format_image_matches(matches),
        recommendations=matches,
        steps=["📷 Image received", f"✓ Suggested {len(matches)} catalog match(es)"]
    ))
    st.session_state.uploader_nonce += 1
    st.rerun()


def process_user_query(prompt: str):
    """Append the user message, answer it and refresh the transcript."""
    result = get_assistant().process(prompt, get_catalog())
    if result["intent"] == "empty":
        return

    st.session_state.messages.append(Message(role=MessageRole.USER, content=prompt.strip()))

    with st.chat_message("user", avatar="👤"):
        st.markdown(prompt)

    with st.chat_message("assistant", avatar="🤖"):
        with st.spinner("🤔 Thinking..."):
            time.sleep(Config.ASSISTANT_REPLY_DELAY)

    st.session_state.messages.append(Message(
        role=MessageRole.ASSISTANT,
        content=result["final_answer"],
        recommendations=result["recommendations"],
        steps=result["steps"]
    ))

    # Rerun to refresh UI with new messages
    st.rerun()
