# Matplotlib → PNG/JPEG/PDF output
import base64
import io
import logging
from typing import Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.patches as patches
from matplotlib.figure import Figure

from roomlayout.editor import Scene

logger = logging.getLogger(__name__)

# Palette matching the interactive canvas
DEFAULT_COLORS = {
    "room": "#f4f8ff",
    "wall": "#1976d2",
    "door_gap": "#ffffff",
    "door_leaf": "#444444",
    "door_anchor": "#007dc3",
    "rack": "#e8f1fb",
    "cable_manager": "#d2e8ff",
    "ac": "#e8f3ff",
    "ac_edge": "#007dc3",
    "selected": "#d32f2f",
    "text": "#003a66",
}

FORMATS = {
    "png": ("png", "image/png"),
    "jpeg": ("jpeg", "image/jpeg"),
    "jpg": ("jpeg", "image/jpeg"),
    "pdf": ("pdf", "application/pdf"),
}

PDF_DPI = 72  # 1 room pixel == 1 PDF point

def pdf_page(room_w: float, room_h: float) -> Tuple[str, Tuple[float, float]]:
    """Page orientation and size in points for a room of room_w x room_h pixels."""
    orientation = "landscape" if room_w > room_h else "portrait"
    return orientation, (room_w, room_h)

def _rounded(x, y, w, h, face, edge, lw, radius=6):
    return patches.FancyBboxPatch(
        (x, y), w, h,
        boxstyle=f"round,pad=0,rounding_size={min(radius, w / 2, h / 2)}",
        facecolor=face, edgecolor=edge, linewidth=lw,
    )

def draw_scene(scene: Scene, dpi: int = PDF_DPI) -> Figure:
    W, H = scene.room_w, scene.room_h
    fig = Figure(figsize=(W / dpi, H / dpi), dpi=dpi)
    fig.patch.set_facecolor("#ffffff")
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, W)
    ax.set_ylim(H, 0)  # screen orientation: y grows downwards
    ax.set_aspect("auto")
    ax.axis("off")

    # --- Room ---
    if len(scene.polygon) >= 3:
        ax.add_patch(patches.Polygon(scene.polygon, closed=True, facecolor=DEFAULT_COLORS["room"],
                                     edgecolor=DEFAULT_COLORS["wall"], linewidth=2))

    # --- Door ---
    g = scene.door_geometry
    if g is not None:
        ax.plot([g.gap_start[0], g.gap_end[0]], [g.gap_start[1], g.gap_end[1]],
                color=DEFAULT_COLORS["door_gap"], linewidth=6, solid_capstyle="butt")
        ax.plot([g.leaf[0], g.leaf[2]], [g.leaf[1], g.leaf[3]], color=DEFAULT_COLORS["door_leaf"], linewidth=3)
        ax.add_patch(patches.Circle(g.anchor, radius=7, facecolor=DEFAULT_COLORS["door_anchor"],
                                    edgecolor="#ffffff", linewidth=2))

    # --- Racks ---
    for rack in scene.racks:
        ax.add_patch(_rounded(rack.x, rack.y, scene.rack_w, scene.rack_d, DEFAULT_COLORS["rack"], DEFAULT_COLORS["wall"], 2))
        ax.text(rack.x + scene.rack_w / 2, rack.y + scene.rack_d / 2, rack.label,
                ha="center", va="center", fontsize=12, color=DEFAULT_COLORS["text"])

    for x, y, w, h in scene.cable_managers:
        ax.add_patch(_rounded(x, y, w, h, DEFAULT_COLORS["cable_manager"], DEFAULT_COLORS["wall"], 1, radius=4))

    # --- AC units ---
    for box in scene.ac_boxes:
        edge = DEFAULT_COLORS["selected"] if box.selected else DEFAULT_COLORS["ac_edge"]
        ax.add_patch(_rounded(box.x, box.y, box.unit.width, box.unit.height, DEFAULT_COLORS["ac"], edge, 4 if box.selected else 2))
        ax.text(box.x + box.unit.width / 2, box.y + box.unit.height / 2, "AC Unit",
                ha="center", va="center", fontsize=12, color=DEFAULT_COLORS["text"])

    return fig

def render_bytes(scene: Scene, fmt: str, dpi: int = PDF_DPI) -> Tuple[bytes, str]:
    """Encode the scene; returns (payload, media type). Raises ValueError on an unknown format."""
    key = fmt.lower()
    if key not in FORMATS:
        raise ValueError(f"Unsupported export format: {fmt}")
    mpl_format, media_type = FORMATS[key]

    # PDF pages are sized in points, so the page is always laid out at 72 dpi.
    fig = draw_scene(scene, PDF_DPI if mpl_format == "pdf" else dpi)
    buf = io.BytesIO()
    kwargs = {"format": mpl_format, "dpi": fig.dpi, "facecolor": fig.get_facecolor()}
    if mpl_format == "pdf":
        orientation, _ = pdf_page(scene.room_w, scene.room_h)
        kwargs["metadata"] = {"Title": "Room layout", "Subject": f"{orientation} page"}
    fig.savefig(buf, **kwargs)
    logger.info("exported %s (%.0fx%.0f px, %d bytes)", mpl_format, scene.room_w, scene.room_h, buf.tell())
    return buf.getvalue(), media_type

def render_base64(scene: Scene, dpi: int = PDF_DPI) -> str:
    data, _ = render_bytes(scene, "png", dpi)
    return base64.b64encode(data).decode("ascii")
