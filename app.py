"""
ScamGuard Streamlit UI
A demo front end for the ScamGuard API: LLM pitch analyzer and photo scanner.
"""

from typing import Optional, Dict, Any

import requests
import streamlit as st


st.set_page_config(
    page_title="ScamGuard AI",
    page_icon="🛡️",
    layout="wide",
)

SAMPLE_PITCHES = [
    {
        "title": "Guaranteed Crypto Returns",
        "content": (
            "Invest in 'QuantumCoin', the new cryptocurrency that uses quantum computing to guarantee "
            "100x returns in just 30 days! There is absolutely no risk. This is a limited time offer, "
            "so you must act now or you will miss out on generational wealth. Our team is anonymous "
            "to protect their privacy."
        ),
    },
    {
        "title": "Eco-Friendly Drone Delivery",
        "content": (
            "We are developing a fleet of solar-powered drones for last-mile delivery. Our proprietary "
            "battery technology allows for 24/7 operation. We project capturing 15% of the North "
            "American market within two years. We need $2M to scale our manufacturing. Our team "
            "includes engineers from top aerospace companies."
        ),
    },
    {
        "title": "Vague AI Health Platform",
        "content": (
            "Our revolutionary platform leverages synergistic AI and blockchain paradigms to disrupt "
            "the healthcare industry. We are building a holistic solution to empower users. The "
            "technology is very complex, but it is game-changing. We have a patent pending and "
            "project billions in revenue."
        ),
    },
]

TIER_ICONS = {"red": "🔴", "yellow": "🟡", "green": "🟢"}


# ---------- Helpers ----------


def _headers(api_key: Optional[str]) -> Optional[Dict[str, str]]:
    return {"X-API-Key": api_key} if api_key else None


def _error_detail(e: requests.exceptions.HTTPError) -> str:
    try:
        return e.response.json().get("detail", e.response.text)
    except ValueError:
        return e.response.text


def call_pitch(base_url: str, api_key: Optional[str], pitch_text: str) -> Dict[str, Any]:
    endpoint = base_url.rstrip("/") + "/analyze/pitch"
    resp = requests.post(endpoint, json={"pitch_text": pitch_text}, headers=_headers(api_key), timeout=120)
    resp.raise_for_status()
    return resp.json()


def call_scan_image(
    base_url: str,
    api_key: Optional[str],
    file_bytes: bytes,
    file_name: str,
    file_type: Optional[str],
) -> Dict[str, Any]:
    endpoint = base_url.rstrip("/") + "/scan/image"
    files = {"file": (file_name, file_bytes, file_type or "application/octet-stream")}
    resp = requests.post(endpoint, files=files, headers=_headers(api_key), timeout=120)
    resp.raise_for_status()
    return resp.json()


def call_scan_text(base_url: str, api_key: Optional[str], text: str) -> Dict[str, Any]:
    endpoint = base_url.rstrip("/") + "/scan/text"
    resp = requests.post(endpoint, data={"text": text}, headers=_headers(api_key), timeout=30)
    resp.raise_for_status()
    return resp.json()


def render_pitch_result(result: Dict[str, Any]):
    st.subheader("🔎 Analysis Result")

    col1, col2 = st.columns(2)
    with col1:
        st.metric("Overall Risk Score", f"{result.get('risk_score', 0)}/10")
    with col2:
        st.metric("Risk Level", result.get("risk_label", "N/A"))

    st.markdown("### 🚩 Key Red Flags Identified")
    for flag in result.get("red_flags") or []:
        st.markdown(f"**{flag.get('title')}**")
        st.caption(flag.get("explanation", ""))

    st.markdown("### 📝 Plain-English Summary")
    st.info(result.get("summary", ""))


def render_scan_result(result: Dict[str, Any]):
    st.subheader("🔎 Scan Result")

    icon = TIER_ICONS.get(result.get("status_color"), "⚪")
    col1, col2 = st.columns(2)
    with col1:
        st.metric("Risk Score", f"{result.get('score', 0)}/100")
    with col2:
        st.metric("Status", f"{icon} {result.get('status', 'N/A')}")
    st.caption(result.get("status_label", ""))

    reasons = result.get("reasons") or []
    if reasons:
        st.markdown("**🚩 Red flags**")
        for reason in reasons:
            st.write(f"- **{reason['category']}**: {reason['label']}")
    else:
        st.write("No scam patterns matched.")

    st.markdown("**💡 Recommendation**")
    st.info(result.get("recommendation", ""))

    if result.get("extracted_text"):
        with st.expander("📄 Extracted text"):
            st.text(result["extracted_text"])


def run_with_errors(func, *args):
    try:
        return func(*args)
    except requests.exceptions.HTTPError as e:
        st.error(f"API Error {e.response.status_code}: {_error_detail(e)}")
    except requests.exceptions.RequestException as e:
        st.error(f"Error calling backend: {e}")
    return None


# ---------- Sidebar config ----------


st.sidebar.title("⚙️ Settings")

base_url = st.sidebar.text_input(
    "Backend URL",
    value="http://127.0.0.1:8000",
    help="ScamGuard API base URL.",
)

api_key = st.sidebar.text_input(
    "API Key (optional)",
    type="password",
    help="Needed only when the server sets API_TOKEN.",
)

st.sidebar.markdown("---")

if st.sidebar.button("🔌 Check Connection"):
    try:
        resp = requests.get(f"{base_url.rstrip('/')}/health", timeout=5)
        if resp.status_code == 200:
            st.sidebar.success("✅ Backend is online!")
        else:
            st.sidebar.error(f"❌ Backend returned {resp.status_code}")
    except requests.exceptions.RequestException as e:
        st.sidebar.error(f"❌ Cannot connect: {e}")


# ---------- Main UI ----------


st.title("🛡️ ScamGuard AI")
st.markdown("**Your Investment Pitch Analyzer**")
st.markdown("---")

tabs = st.tabs(["💼 Pitch Analyzer", "📷 Photo Scanner", "📝 Quick Text Scan"])


# --- PITCH TAB ---
with tabs[0]:
    st.header("Investment Pitch Analysis")
    st.markdown("An AI model reviews the pitch for red flags. Pick a sample or paste your own.")

    sample_cols = st.columns(len(SAMPLE_PITCHES))
    for col, sample in zip(sample_cols, SAMPLE_PITCHES):
        with col:
            if st.button(sample["title"], key=f"sample_{sample['title']}"):
                st.session_state["pitch_text"] = sample["content"]

    pitch_text = st.text_area("Investment pitch", height=200, key="pitch_text")

    if st.button("🔍 Analyze Pitch", key="analyze_pitch", type="primary"):
        if not pitch_text.strip():
            st.warning("Please enter an investment pitch to analyze.")
        else:
            with st.spinner("Analyzing..."):
                result = run_with_errors(call_pitch, base_url, api_key, pitch_text)
            if result:
                render_pitch_result(result)


# --- PHOTO TAB ---
with tabs[1]:
    st.header("Photo Scam Scanner")
    st.markdown("Upload a screenshot of a message, ad, or email. Text is extracted with OCR and checked for scam patterns.")

    image_file = st.file_uploader(
        "Upload an image (PNG, JPG, WebP, BMP, GIF; max 10 MB)",
        type=["png", "jpg", "jpeg", "webp", "bmp", "gif"],
    )

    if image_file is not None:
        st.image(image_file, caption="Uploaded image", use_container_width=True)

    if st.button("🔍 Scan Image", key="scan_image", type="primary"):
        if image_file is None:
            st.warning("Please upload an image.")
        else:
            with st.spinner("Recognizing text and analyzing for scam patterns..."):
                result = run_with_errors(
                    call_scan_image,
                    base_url,
                    api_key,
                    image_file.getvalue(),
                    image_file.name,
                    image_file.type,
                )
            if result:
                render_scan_result(result)


# --- TEXT TAB ---
with tabs[2]:
    st.header("Quick Text Scan")
    st.markdown("Rule-based check of any message. Runs locally on the server, no AI call.")

    text = st.text_area("Paste a message", height=200, key="scan_text")

    if st.button("🔍 Scan Text", key="scan_text_button", type="primary"):
        if not text.strip():
            st.warning("Please enter some text.")
        else:
            result = run_with_errors(call_scan_text, base_url, api_key, text)
            if result:
                render_scan_result(result)


st.markdown("---")
st.markdown(
    "<div style='text-align: center; color: gray;'>"
    "ScamGuard AI • For educational purposes only. Not financial advice."
    "</div>",
    unsafe_allow_html=True,
)
