from __future__ import annotations

from typing import Any, Dict, List, Mapping

from multirun.models import ALL_SUITES


def _suite_label(name: str, definition: Any) -> str:
    if not isinstance(definition, Mapping):
        return name
    browsers = definition.get("browsers") or []
    names = [b.get("browser") if isinstance(b, Mapping) else str(b) for b in browsers]
    suffix = f" [{', '.join(str(n) for n in names)}]" if names else ""
    chunks = definition.get("chunks")
    if chunks and not callable(chunks):
        suffix += f" x{chunks} chunks"
    return f"{name}{suffix}"


def suite_menu_options(multiple: Mapping[str, Any]) -> Dict[str, str]:
    """Menu entries for every configured suite, plus 'all'."""
    options = {name: _suite_label(name, definition) for name, definition in multiple.items()}
    options[ALL_SUITES] = "Every configured suite"
    return options


def choose_suites(multiple: Mapping[str, Any]) -> List[str]:
    """Prompt for one suite (or 'all') and return it as a one-element selection."""
    options = suite_menu_options(multiple)
    keys = list(options.keys())
    print("\nChoose a suite to run:")
    for idx, key in enumerate(keys, start=1):
        print(f"[{idx}] {options[key]}")

    while True:
        choice = input(f"Enter number (1-{len(keys)}) or Z to exit: ").strip()
        if choice.upper() == "Z":
            print("Exiting (Z selected).")
            raise SystemExit(0)
        if choice.isdigit() and 1 <= int(choice) <= len(keys):
            return [keys[int(choice) - 1]]
        print(f"Invalid choice. Please enter 1-{len(keys)} or Z.")
