from __future__ import annotations

import io
import sys
from pathlib import Path

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.helpers import load_viewer_config, outcome_rows, reason_counts_text
from scholarship_eval.ingest.csv_reader import (
    ApplicationBatch,
    parse_application_rows,
    read_applications_csv,
    read_raw_rows,
)
from scholarship_eval.io.results import summarize_outcomes
from scholarship_eval.rules.dispatch import evaluate_batch, outcomes_to_frame

DEFAULT_INPUT = ROOT_DIR / "data" / "ScholarshipApplications.csv"
DEFAULT_CONFIG = ROOT_DIR / "data" / "rule_config.example.json"


def _ensure_session_state() -> None:
    st.session_state.setdefault("outcomes", None)
    st.session_state.setdefault("skipped", ())
    st.session_state.setdefault("input_path", str(DEFAULT_INPUT))


def _load_uploaded_batch(uploaded_file) -> ApplicationBatch:  # noqa: ANN001
    text = uploaded_file.getvalue().decode("utf-8")
    return parse_application_rows(read_raw_rows(io.StringIO(text)))


def _render_sidebar() -> None:
    st.sidebar.header("Input")
    uploaded_file = st.sidebar.file_uploader("Applications CSV", type=["csv", "txt"])
    st.session_state.input_path = st.sidebar.text_input(
        "...or a path on disk", value=st.session_state.input_path
    )

    if st.sidebar.button("Evaluate", type="primary"):
        try:
            config = load_viewer_config(DEFAULT_CONFIG)
            if uploaded_file is not None:
                batch = _load_uploaded_batch(uploaded_file)
            else:
                batch = read_applications_csv(Path(st.session_state.input_path))
        except FileNotFoundError as exc:
            st.sidebar.error(str(exc))
            return
        except ValueError as exc:
            st.sidebar.error(f"Could not read input: {exc}")
            return

        st.session_state.outcomes = evaluate_batch(batch, config)
        st.session_state.skipped = batch.skipped


def _render_results() -> None:
    outcomes = st.session_state.outcomes
    if outcomes is None:
        st.info("Upload an applications CSV or choose a path, then press Evaluate.")
        return

    summary = summarize_outcomes(outcomes)
    total_col, accepted_col, rejected_col = st.columns(3)
    total_col.metric("Applications", summary["total"])
    accepted_col.metric("Accepted", summary["accepted"])
    rejected_col.metric("Rejected", summary["rejected"])
    st.caption(f"Top rejection reasons: {reason_counts_text(summary['by_reason'])}")

    if st.session_state.skipped:
        st.warning(f"Skipped applicants with invalid data: {', '.join(st.session_state.skipped)}")

    category_filter = st.multiselect(
        "Scholarship",
        options=sorted(summary["by_category"]),
        default=sorted(summary["by_category"]),
    )
    visible = [outcome for outcome in outcomes if outcome.category.value in category_filter]
    st.dataframe(outcome_rows(visible), use_container_width=True, hide_index=True)

    st.download_button(
        "Download results (CSV)",
        data=outcomes_to_frame(outcomes).to_csv(index=False).encode("utf-8"),
        file_name="scholarship_results.csv",
        mime="text/csv",
    )


def main() -> None:
    st.set_page_config(page_title="Scholarship Evaluation", layout="wide")
    st.title("Scholarship Evaluation")
    _ensure_session_state()
    _render_sidebar()
    _render_results()


if __name__ == "__main__":
    main()
