import logging

import streamlit as st

from config import configure_logging, load_config_from_env
from controls import clamp_point, locked_dimensions
from geometry import DegenerateGeometryError, default_corners, order_points
from processing import rectify, resize
from raster import draw_selection, encode_image, load_image

cfg = load_config_from_env()
configure_logging(cfg.log_level)
logger = logging.getLogger("scanify")

CORNER_LABELS = ("Top-left", "Top-right", "Bottom-right", "Bottom-left")
MIME_TYPES = {"JPEG": "image/jpeg", "PNG": "image/png"}

# ---------------------- Custom CSS ----------------------
st.markdown("""
<style>
    html, body, [class*="css"] {
        font-family: 'Segoe UI', system-ui, sans-serif;
    }
    .main-container {
        max-width: 1200px;
        padding: 2rem 1rem;
        margin: 0 auto;
    }
    .header {
        text-align: center;
        padding: 2rem 0;
        border-bottom: 2px solid #e0e0e0;
        margin-bottom: 2rem;
    }
    .title {
        color: #2c3e50;
        font-size: 2.5rem;
        font-weight: 700;
        margin: 0.5rem 0;
    }
    .subheader {
        color: #7f8c8d;
        font-size: 1.1rem;
    }
    .stDownloadButton button {
        background: #22c55e !important;
        color: white !important;
        border-radius: 25px;
        padding: 0.5rem 2rem;
    }
</style>
""", unsafe_allow_html=True)


# ---------------------- SESSION STATE ----------------------
def reset_corners(width, height):
    for i, (x, y) in enumerate(default_corners(width, height, cfg.corner_inset)):
        st.session_state[f"corner_{i}_x"] = float(round(x))
        st.session_state[f"corner_{i}_y"] = float(round(y))
    st.session_state.pop("warped", None)


def current_corners(width, height):
    return [
        clamp_point((st.session_state[f"corner_{i}_x"], st.session_state[f"corner_{i}_y"]), width, height)
        for i in range(4)
    ]


def set_resize_defaults(warped):
    height, width = warped.shape[:2]
    st.session_state["resize_w"] = width
    st.session_state["resize_h"] = height
    st.session_state["aspect_ratio"] = width / float(height)


def on_resize_change(edited):
    if not st.session_state.get("lock_aspect", True):
        return
    value = st.session_state["resize_w" if edited == "w" else "resize_h"]
    try:
        w, h = locked_dimensions(value, edited, st.session_state["aspect_ratio"])
    except ValueError:
        return
    st.session_state["resize_w"] = w
    st.session_state["resize_h"] = h


# ---------------------- MAIN APP ----------------------
def main():
    st.markdown('<div class="main-container">', unsafe_allow_html=True)

    # Header
    st.markdown("""
        <div class="header">
            <h1 class="title">📄 Scanify</h1>
            <p class="subheader">Flatten and straighten slanted document photos</p>
        </div>
    """, unsafe_allow_html=True)

    uploaded_file = st.file_uploader("Upload a document photo",
                                     type=["jpg", "jpeg", "png", "webp", "bmp"],
                                     help="Upload one document image",
                                     key="uploader")
    if uploaded_file is None:
        footer()
        return

    try:
        img = load_image(uploaded_file.getvalue(), cfg.max_upload_side)
    except ValueError as e:
        logger.warning("Upload %s rejected: %s", uploaded_file.name, e)
        st.error(f"⚠️ Error reading {uploaded_file.name}: {e}")
        footer()
        return
    height, width = img.shape[:2]

    image_key = (uploaded_file.name, uploaded_file.size)
    if st.session_state.get("image_key") != image_key:
        st.session_state["image_key"] = image_key
        reset_corners(width, height)

    # Crop section
    st.markdown("### ✂️ Adjust the corners")
    st.caption("Move the 4 corners to match the document edges")
    col_inputs, col_preview = st.columns([1, 2])

    with col_inputs:
        for i, label in enumerate(CORNER_LABELS):
            cx, cy = st.columns(2)
            cx.number_input(f"{i + 1}. {label} x", min_value=0.0, max_value=float(width),
                            step=1.0, key=f"corner_{i}_x")
            cy.number_input(f"{i + 1}. {label} y", min_value=0.0, max_value=float(height),
                            step=1.0, key=f"corner_{i}_y")
        auto_order = st.checkbox("Sort corners automatically", value=False,
                                 help="Reorder the points as top-left, top-right, bottom-right, bottom-left")
        st.button("Reset corners", on_click=reset_corners, args=(width, height))

    corners = current_corners(width, height)
    if auto_order:
        corners = list(order_points(corners))

    with col_preview:
        st.image(draw_selection(img, corners), caption=f"Source {width}×{height}", use_container_width=True)

    if st.button("Flatten document", type="primary"):
        try:
            with st.spinner("📐 Flattening..."):
                warped = rectify(img, corners, strict=cfg.strict_geometry)
        except DegenerateGeometryError as e:
            logger.warning("Could not rectify selection %s: %s", corners, e)
            st.error(f"⚠️ Could not process this selection: {e}")
        else:
            st.session_state["warped"] = warped
            set_resize_defaults(warped)

    warped = st.session_state.get("warped")
    if warped is not None:
        result(warped)

    footer()
    st.markdown('</div>', unsafe_allow_html=True)


def result(warped):
    st.markdown("---")
    st.markdown("### 📄 Flattened result")
    st.image(warped, caption=f"{warped.shape[1]}×{warped.shape[0]}", use_container_width=True)

    st.markdown("### 📏 Export size")
    st.checkbox("Lock aspect ratio", value=True, key="lock_aspect")
    cw, ch = st.columns(2)
    cw.number_input("Width (px)", min_value=1, step=1, key="resize_w",
                    on_change=on_resize_change, args=("w",))
    ch.number_input("Height (px)", min_value=1, step=1, key="resize_h",
                    on_change=on_resize_change, args=("h",))

    try:
        final = resize(warped, st.session_state["resize_w"], st.session_state["resize_h"])
        data = encode_image(final, cfg.output_format, cfg.jpeg_quality)
    except ValueError as e:
        logger.exception("Export failed")
        st.error(f"⚠️ Could not export the document: {e}")
        return

    extension = "jpg" if cfg.output_format == "JPEG" else cfg.output_format.lower()
    st.download_button(
        label="Download scanned document",
        data=data,
        file_name=f"scanned-document.{extension}",
        mime=MIME_TYPES[cfg.output_format],
    )


def footer():
    st.markdown("---")
    st.markdown("""
        <div style="text-align: center; color: #7f8c8d; margin-top: 3rem;">
            <p>Scanify • v1.0 • Perspective Document Scanner</p>
            <p>Powered by NumPy, OpenCV & Streamlit</p>
        </div>
    """, unsafe_allow_html=True)


if __name__ == "__main__":
    main()
