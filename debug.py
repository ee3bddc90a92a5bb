# debug.py
from __future__ import annotations
import logging
from typing import Dict

class Debug:
    _root_configured: bool = False          # class-level guard

    # component map shared by every instance, so the CLI can switch on
    # tracing for modules that created their own Debug()
    _components: Dict[str, bool] = {
        "alphabet":    False,
        "permutation": False,
        "rotor":       False,
        "stepping":    False,
        "plugboard":   False,
        "machine":     False,
        "config":      False,
    }

    def __init__(self) -> None:
        """Every Debug() shares one root logger config and one component map."""
        if not Debug._root_configured:
            logging.basicConfig(
                format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
                handlers=[logging.StreamHandler()],
            )
            Debug._root_configured = True

        # components gate the output, so the logger itself lets DEBUG through
        self.logger = logging.getLogger("ENIGMA")
        self.logger.setLevel(logging.DEBUG)

    # ── logging API ──────────────────────────────────────────────
    def log(self, component: str, message: str) -> None:
        if Debug._components.get(component, False):
            self.logger.debug("[%s] %s", component.upper(), message)

    # ── component toggles ────────────────────────────────────────
    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = True

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            Debug._components[c] = False

    def status(self) -> Dict[str, bool]:
        """Return a *copy* of the current component map."""
        return Debug._components.copy()

    @classmethod
    def components(cls) -> list[str]:
        return sorted(cls._components)

    # ── helpers ──────────────────────────────────────────────────
    def _require(self, component: str) -> None:
        if component not in Debug._components:
            raise ValueError(f"No such component: {component!r}")
