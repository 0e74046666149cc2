"""
Pytest Configuration and Shared Fixtures

Provides sample guide sets for testing guidelint components.
"""

from pathlib import Path
from typing import Callable, Dict

import pytest

from guidelint.config import LintConfig
from guidelint.documents import GuideSet, load_guide_set
from guidelint.rules import RuleContext

INDEX_CONTENT = """# AI Assistant Guides

Best practices for prompting a coding assistant, one guide per platform.

- [Android](android-best-practices.md)
- [iOS](ios-best-practices.md)
- [Web](web-best-practices.md)
- [Project site](https://example.com/guides)
"""

ANDROID_CONTENT = """# Android Best Practices

## Project Setup

Tell the assistant which Gradle plugin version and compile SDK you target.

```groovy
android {
    compileSdk 34
}
```

## Prompting

Ask for Kotlin coroutines instead of callbacks, see [setup](#project-setup).
"""

IOS_CONTENT = """---
title: iOS Best Practices
platform: ios
---

# iOS Best Practices

## Xcode Projects

Mention the deployment target and whether the app uses SwiftUI or UIKit.

```swift
struct ContentView: View {
    var body: some View { Text("Hello") }
}
```

## Reviews

Ask for accessibility labels on every control before merging.
"""

WEB_CONTENT = """# Web Best Practices

## Tooling

Share the relevant `package.json` scripts and the bundler in use.

```json
{"scripts": {"build": "vite build"}}
```

## Testing

Request component tests next to the code they cover; read the
[Android guide](android-best-practices.md#prompting) for a comparison.
"""


def write_files(root: Path, files: Dict[str, str]) -> Path:
    """Write ``{relative_path: content}`` under root and return root."""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def clean_files() -> Dict[str, str]:
    """A guide set with no lint findings."""
    return {
        "README.md": INDEX_CONTENT,
        "android-best-practices.md": ANDROID_CONTENT,
        "ios-best-practices.md": IOS_CONTENT,
        "web-best-practices.md": WEB_CONTENT,
    }


@pytest.fixture
def guides_dir(tmp_path: Path, clean_files: Dict[str, str]) -> Path:
    """Directory holding the clean guide set."""
    root = tmp_path / "guides"
    root.mkdir()
    return write_files(root, clean_files)


@pytest.fixture
def make_guide_set(tmp_path: Path) -> Callable[[Dict[str, str]], GuideSet]:
    """Factory: write files into a fresh directory and load them."""
    counter = {"n": 0}

    def _make(files: Dict[str, str]) -> GuideSet:
        counter["n"] += 1
        root = tmp_path / f"set{counter['n']}"
        root.mkdir()
        write_files(root, files)
        return load_guide_set([root])

    return _make


@pytest.fixture
def make_context(make_guide_set) -> Callable[..., RuleContext]:
    """Factory: build a RuleContext for a dict of files."""

    def _make(files: Dict[str, str], **config) -> RuleContext:
        return RuleContext(config=LintConfig(**config), guide_set=make_guide_set(files))

    return _make


@pytest.fixture
def add_files() -> Callable[[Path, Dict[str, str]], Path]:
    """Write extra files into an existing directory."""
    return write_files
