# ui/dashboard.py
import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import streamlit as st
from ui.client import DashboardError, analyze_resumes, results_to_frame
# -------------------- CONFIG --------------------
API_URL = os.getenv("API_URL", "http://localhost:3000")
MAX_RESUMES = int(os.getenv("MAX_RESUMES", "10"))
st.set_page_config(page_title="Resume Analyzer", page_icon="🧠", layout="wide")
st.title("🤖 Resume Analyzer")

st.markdown(
    "Upload a job description and up to ten resumes to get a ranked list of candidates "
    "with fit scores, reasoning, improvement suggestions and matched/missing criteria."
)

# -------------------- SESSION STATE --------------------
if "api_url" not in st.session_state:
    st.session_state.api_url = API_URL

# Persist the last ranking so it survives reruns
if "last_results" not in st.session_state:
    st.session_state.last_results = None

# -------------------- UPLOAD --------------------
with st.form("analyze_form", clear_on_submit=False):
    jd_file = st.file_uploader("📄 Job Description (PDF or TXT)", type=["pdf", "txt"])
    resume_files = st.file_uploader(
        "🧾 Resumes (PDF or TXT)", type=["pdf", "txt"], accept_multiple_files=True
    )
    submitted = st.form_submit_button("🔍 Analyze Resumes")

if submitted:
    if not jd_file or not resume_files:
        st.warning("Please upload a job description and at least one resume.")
    elif len(resume_files) > MAX_RESUMES:
        st.warning(f"Please upload at most {MAX_RESUMES} resumes.")
    else:
        with st.spinner("⏳ Scoring resumes, this can take a while..."):
            try:
                results = analyze_resumes(
                    st.session_state.api_url,
                    (jd_file.name, jd_file.getvalue()),
                    [(f.name, f.getvalue()) for f in resume_files],
                )
            except DashboardError as e:
                st.error(f"❌ Analysis failed: {e}")
                st.stop()

        st.session_state.last_results = results
        skipped = len(resume_files) - len(results)
        st.success(f"✅ Ranked {len(results)} candidate(s).")
        if skipped:
            st.caption(f"{skipped} resume(s) could not be processed and were skipped.")

# -------------------- RANKING --------------------
results = st.session_state.get("last_results")
if results is not None:
    if not results:
        st.warning("No resumes could be analyzed.")
    else:
        st.markdown("### 📊 Ranking")
        st.table(results_to_frame(results))

        for res in results:
            with st.expander(f"🧑 {res['name']} — {res['score']} / 100"):
                st.markdown(f"🧠 {res.get('reasoning') or '—'}")

                improvements = res.get("improvements", [])
                st.markdown("#### Improvements")
                if improvements:
                    for item in improvements:
                        st.markdown(f"- {item}")
                else:
                    st.markdown("—")

                metrics = res.get("metrics", [])
                st.markdown("#### Metrics")
                if metrics:
                    for item in metrics:
                        st.markdown(f"- {item}")
                else:
                    st.markdown("—")
