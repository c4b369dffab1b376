import streamlit as st

from sentiment_predictor import SentimentPredictor
from sentiment_predictor.config import CSV_MIME_TYPE, configure_logging
from sentiment_predictor.presenter import BUSY_LABELS, present
from sentiment_predictor.state import Phase

# streamlit run main.py  (the /predict service must be listening, see config.py)
configure_logging()

PENDING_KEY = "pending_submission"

st.title("Customer Sentiment Prediction")
st.write("Analyze sentiment of individual text or bulk process CSV files")

# One predictor per browser session; it owns the staged input and the last outcome.
if "predictor" not in st.session_state:
    st.session_state["predictor"] = SentimentPredictor()
predictor = st.session_state["predictor"]
state = predictor.state


def on_file_selected(key):
    uploaded = st.session_state.get(key)
    if uploaded is None:
        # The file was removed from the uploader.
        predictor.clear_file()
    else:
        predictor.select_file(uploaded.name, uploaded, uploaded.type)


def on_text_submitted():
    predictor.set_text(st.session_state["review"])
    st.session_state[PENDING_KEY] = Phase.SUBMITTING_TEXT


def on_bulk_submitted():
    st.session_state[PENDING_KEY] = Phase.SUBMITTING_BULK


def on_clear():
    predictor.reset()
    # Widgets can only be written to before they are drawn, i.e. from a callback.
    st.session_state["review"] = ""


view = present(state)

if view.can_clear:
    st.button("Clear all", key="clear-all", on_click=on_clear)

bulk_column, text_column = st.columns(2)

with bulk_column:
    st.subheader("Bulk CSV Prediction")

    # The uploader key changes on every reset, which empties the widget so the
    # same file can be picked again.
    uploader_key = f"csv-upload-{state.uploader_generation}"
    st.file_uploader(
        "Upload CSV File",
        type="csv",
        accept_multiple_files=False,
        key=uploader_key,
        on_change=on_file_selected,
        args=(uploader_key,),
    )
    st.caption(view.file_label)
    st.caption('CSV should have a "Sentence" column containing text to analyze')

    st.button(
        view.bulk_button,
        key="predict-bulk",
        disabled=not view.can_submit_file,
        on_click=on_bulk_submitted,
    )

with text_column:
    st.subheader("Single Text Prediction")
    # Inside a form Ctrl+Enter submits, and the text arrives with the click.
    with st.form("single-text", border=False):
        st.text_area(
            "Enter Text to Analyze",
            key="review",
            placeholder="Type or paste your text here...",
            height=160,
        )
        st.caption("Press Ctrl+Enter (Cmd+Enter on Mac) to submit")
        st.form_submit_button(
            view.text_button,
            key="predict-text",
            disabled=not view.can_submit_text,
            on_click=on_text_submitted,
        )

status_slot = st.empty()


def show_status(current):
    status_slot.caption(present(current).status_line)


# Submissions run here rather than in the button callbacks, so the spinner and
# the "Processing..." status are on screen while the request is in flight.
predictor.on_phase_change = show_status
pending = st.session_state.pop(PENDING_KEY, None)
if pending == Phase.SUBMITTING_TEXT:
    with st.spinner(BUSY_LABELS[pending]):
        predictor.submit_text()
elif pending == Phase.SUBMITTING_BULK:
    with st.spinner(BUSY_LABELS[pending]):
        predictor.submit_file()

view = present(state)
status_slot.caption(view.status_line)

if view.error:
    st.error(view.error)
elif view.result:
    st.subheader("Prediction Result")
    st.success(view.result)

if view.can_download:
    # st.download_button is the browser's save primitive here.
    predictor.download(
        lambda handle, filename: st.download_button(
            label=f"Download {filename}",
            data=handle.getvalue(),
            file_name=filename,
            mime=CSV_MIME_TYPE,
            key="result_download_button",
        )
    )

    with st.expander("Preview predictions"):
        st.dataframe(state.download.to_frame())
        counts = state.download.sentiment_counts()
        if counts is not None:
            st.caption(", ".join(f"{label}: {count}" for label, count in counts.items()))

if view.image_uri:
    st.subheader("Sentiment Distribution")
    st.image(state.image.data, caption="Sentiment Distribution")
