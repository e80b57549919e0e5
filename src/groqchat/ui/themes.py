"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes for the light and dark modes
- Theme variables (borders, scrollbars, input cursor)

The persisted dark-mode flag selects between the two themes.
"""

from textual.theme import Theme

# Light mode: warm stone background, charcoal accents
LIGHT_THEME = Theme(
    name="groqchat-light",
    primary="#1f2937",      # Charcoal - user bubbles, send button
    secondary="#6b7280",    # Gray - assistant accents
    accent="#2563eb",       # Blue - highlights
    foreground="#1f2937",
    background="#f5f5f4",   # Stone
    success="#15803d",
    warning="#b45309",
    error="#b91c1c",
    surface="#ffffff",
    panel="#fafaf9",
    dark=False,
    variables={
        "border": "#d1d5db",
        "border-blurred": "#e5e7eb",
        "input-cursor-background": "#1f2937",
        "input-cursor-foreground": "#ffffff",
        "input-selection-background": "#2563eb 25%",
        "scrollbar": "#d6d3d1",
        "scrollbar-hover": "#a8a29e",
        "scrollbar-active": "#1f2937",
        "scrollbar-background": "#f5f5f4",
        "footer-background": "#e7e5e4",
        "footer-key-foreground": "#2563eb",
        "text-muted": "#78716c",
    },
)

# Dark mode: deep gray background, blue accents
DARK_THEME = Theme(
    name="groqchat-dark",
    primary="#2563eb",      # Blue - user bubbles, send button
    secondary="#9ca3af",    # Light gray - assistant accents
    accent="#60a5fa",
    foreground="#f9fafb",
    background="#111827",   # Gray 900
    success="#4ade80",
    warning="#fbbf24",
    error="#f87171",
    surface="#1f2937",      # Gray 800
    panel="#374151",        # Gray 700
    dark=True,
    variables={
        "border": "#4b5563",
        "border-blurred": "#374151",
        "input-cursor-background": "#f9fafb",
        "input-cursor-foreground": "#111827",
        "input-selection-background": "#60a5fa 30%",
        "scrollbar": "#374151",
        "scrollbar-hover": "#4b5563",
        "scrollbar-active": "#60a5fa",
        "scrollbar-background": "#111827",
        "footer-background": "#1f2937",
        "footer-key-foreground": "#60a5fa",
        "text-muted": "#9ca3af",
    },
)

THEMES = (LIGHT_THEME, DARK_THEME)


def theme_name(dark_mode: bool) -> str:
    """Name of the registered theme for a dark-mode flag."""
    return DARK_THEME.name if dark_mode else LIGHT_THEME.name
