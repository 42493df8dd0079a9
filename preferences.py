from dataclasses import dataclass

from storage import KeyValueStore

THEME_KEY = "themeMode"
LIGHT = "light"
DARK = "dark"


@dataclass
class PreferencesContext:
    store: KeyValueStore

    @property
    def theme_mode(self) -> str:
        mode = self.store.get(THEME_KEY)
        return mode if mode in (LIGHT, DARK) else LIGHT

    def set_theme_mode(self, mode: str) -> str:
        if mode not in (LIGHT, DARK):
            raise ValueError(f"Unknown theme mode: {mode}")
        self.store.set(THEME_KEY, mode)
        return mode

    def toggle_theme(self) -> str:
        return self.set_theme_mode(DARK if self.theme_mode == LIGHT else LIGHT)
