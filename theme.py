CHART_COLORS = ["#2563eb", "#7c3aed", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#06b6d4", "#ec4899"]

_LIGHT = {
    "primary": "#2563eb",
    "primary_dark": "#1e40af",
    "secondary": "#7c3aed",
    "background": "#f8fafc",
    "paper": "#ffffff",
    "text": "#0f172a",
    "text_secondary": "#64748b",
    "border": "rgba(226, 232, 240, 0.8)",
}

_DARK = {
    "primary": "#3b82f6",
    "primary_dark": "#2563eb",
    "secondary": "#a78bfa",
    "background": "#0f172a",
    "paper": "#1e293b",
    "text": "#f8fafc",
    "text_secondary": "#94a3b8",
    "border": "rgba(255, 255, 255, 0.1)",
}

_SHARED = {"success": "#10b981", "error": "#ef4444", "warning": "#f59e0b"}


def palette(mode: str) -> dict:
    base = _DARK if mode == "dark" else _LIGHT
    return {**base, **_SHARED}


def css(mode: str) -> str:
    p = palette(mode)
    return f"""
    <style>
        .stApp {{background-color: {p['background']}; color: {p['text']};}}
        .stApp h1, .stApp h2, .stApp h3, .stApp h4, .stApp p, .stApp label {{color: {p['text']};}}
        .resume-card {{background-color: {p['paper']}; border: 1px solid {p['border']}; border-radius: 12px;
                       padding: 16px 18px; margin-bottom: 12px; font-family: sans-serif;}}
        .resume-card .name {{font-size: 17px; font-weight: 700; color: {p['text']};}}
        .resume-card .field {{font-size: 13px; color: {p['text_secondary']}; margin-top: 4px;}}
        .role-chip {{display: inline-block; padding: 3px 9px; border-radius: 12px; font-size: 11px; font-weight: 600;
                     color: {p['primary']}; background-color: rgba(37, 99, 235, 0.08); margin-top: 6px;}}
        .stat-card {{background-color: {p['paper']}; border: 1px solid {p['border']}; border-radius: 12px;
                     padding: 18px; text-align: center;}}
        .stat-card .value {{font-size: 32px; font-weight: 800; color: {p['text']};}}
        .stat-card .label {{font-size: 13px; color: {p['text_secondary']};}}
        .status-online {{color: {p['success']}; font-weight: 700;}}
        .status-offline {{color: {p['error']}; font-weight: 700;}}
    </style>
    """
