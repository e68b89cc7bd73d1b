#  Copyright © 2025 Bentley Systems, Incorporated
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#      http://www.apache.org/licenses/LICENSE-2.0
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.

from __future__ import annotations

import io
import os
import re
import stat
import tarfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from tfe import logging
from tfe.common.exceptions import ClientValueError

__all__ = ["IGNORE_FILE", "IgnoreRule", "load_ignore_rules", "pack"]

logger = logging.getLogger("configuration_versions.io")

IGNORE_FILE = ".terraformignore"

_DEFAULT_IGNORE_RULES = (".git/", ".terraform/", "!.terraform/modules/")


@dataclass(frozen=True)
class IgnoreRule:
    """A single `.terraformignore` pattern.

    Patterns follow the `.gitignore` conventions: `*` and `?` match within one path segment, `**` matches across
    segments, a leading `!` re-includes paths excluded by an earlier rule, and a trailing `/` only matches directories
    and their contents. A pattern that contains a `/` before its last character is relative to the root of the
    directory being packed; any other pattern matches at every depth.
    """

    pattern: str
    negated: bool
    directory_only: bool
    regex: re.Pattern[str]

    @classmethod
    def parse(cls, line: str) -> IgnoreRule | None:
        """Parse one line of an ignore file, or return None for blank lines and comments."""
        pattern = line.strip()
        if not pattern or pattern.startswith("#"):
            return None

        negated = pattern.startswith("!")
        if negated:
            pattern = pattern[1:]
        directory_only = pattern.endswith("/")
        pattern = pattern.strip("/") if pattern.startswith("/") else pattern.rstrip("/")
        if not pattern:
            return None

        anchored = "/" in pattern or line.strip().lstrip("!").startswith("/")
        body = _translate(pattern)
        if not anchored:
            body = f"(?:.*/)?{body}"
        return cls(pattern=pattern, negated=negated, directory_only=directory_only, regex=re.compile(body))

    def matches(self, relpath: str, is_dir: bool) -> bool:
        """Whether the rule matches a path, or one of the directories that contain it."""
        parts = relpath.split("/")
        for depth in range(len(parts), 0, -1):
            candidate = "/".join(parts[:depth])
            # Every proper prefix of the path is a directory.
            if self.directory_only and depth == len(parts) and not is_dir:
                continue
            if self.regex.fullmatch(candidate):
                return True
        return False

    def may_match_below(self, relpath: str) -> bool:
        """Whether a negated rule could re-include something inside the directory `relpath`."""
        literal = re.split(r"[*?\[]", self.pattern, maxsplit=1)[0]
        return "/" not in self.pattern or literal.startswith(relpath + "/") or relpath.startswith(literal)


def _translate(pattern: str) -> str:
    """Translate a glob pattern into a regular expression over `/` separated paths."""
    out = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif pattern[i] == "*":
            out.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            out.append("[^/]")
            i += 1
        elif pattern[i] == "[" and (end := pattern.find("]", i + 1)) > i + 1:
            chars = pattern[i + 1 : end].replace("\\", "\\\\")
            out.append("[" + ("^" + chars[1:] if chars.startswith("!") else chars) + "]")
            i = end + 1
        else:
            out.append(re.escape(pattern[i]))
            i += 1
    return "".join(out)


def load_ignore_rules(root: str | os.PathLike[str]) -> list[IgnoreRule]:
    """Get the default ignore rules, followed by the rules in the `.terraformignore` file of `root`, if any.

    `.git/` and `.terraform/` are always ignored, except for `.terraform/modules/`.
    """
    lines: Iterable[str] = _DEFAULT_IGNORE_RULES
    ignore_file = Path(root) / IGNORE_FILE
    if ignore_file.is_file():
        logger.debug(f"Applying ignore rules from {ignore_file}")
        lines = [*lines, *ignore_file.read_text(encoding="utf-8").splitlines()]
    return [rule for line in lines if (rule := IgnoreRule.parse(line)) is not None]


def _is_ignored(rules: Sequence[IgnoreRule], relpath: str, is_dir: bool) -> bool:
    ignored = False
    for rule in rules:
        if rule.negated == ignored and rule.matches(relpath, is_dir):
            ignored = not rule.negated
    return ignored


def _keep(mode: int) -> bool:
    return stat.S_ISREG(mode) or stat.S_ISDIR(mode) or stat.S_ISLNK(mode)


def _check_symlink(path: Path, root: Path, allowed_targets: Sequence[Path]) -> None:
    target = Path(os.path.realpath(path))
    if target.is_relative_to(root) or any(target.is_relative_to(allowed) for allowed in allowed_targets):
        return
    raise ClientValueError(f"Symlink {str(path)!r} points outside of the directory being packed: {str(target)!r}")


def pack(
    src: str | os.PathLike[str],
    apply_ignore: bool = True,
    allowed_symlink_targets: Sequence[str | os.PathLike[str]] = (),
) -> bytes:
    """Pack a directory into a gzip compressed tarball.

    Regular files, directories and symlinks are archived with paths relative to `src`. Symlinks are stored as links and
    are not followed. Any other type of file is skipped.

    :param src: The directory to pack.
    :param apply_ignore: Skip `.git/`, `.terraform/` (except `.terraform/modules/`) and the paths that are listed in
        the `.terraformignore` file of `src`.
    :param allowed_symlink_targets: Paths outside of `src` that symlinks may point to.

    :return: The compressed archive.

    :raises ClientValueError: If `src` is not a directory, or a symlink points outside of `src` and every allowed
        target.
    """
    root = Path(src)
    if not root.is_dir():
        raise ClientValueError(f"{str(root)!r} is not a directory")

    real_root = Path(os.path.realpath(root))
    allowed = [Path(os.path.realpath(target)) for target in allowed_symlink_targets]
    rules = load_ignore_rules(root) if apply_ignore else []
    negations = [rule for rule in rules if rule.negated]

    buffer = io.BytesIO()
    n_entries = 0
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for name in sorted([*dirnames, *filenames]):
                path = Path(dirpath) / name
                mode = path.lstat().st_mode
                if not _keep(mode):
                    logger.debug(f"Skipping {path}")
                    continue

                relpath = path.relative_to(root).as_posix()
                is_dir = stat.S_ISDIR(mode)
                if _is_ignored(rules, relpath, is_dir):
                    logger.debug(f"Ignoring {relpath}")
                    if is_dir and not any(rule.may_match_below(relpath) for rule in negations):
                        dirnames.remove(name)
                    continue

                if stat.S_ISLNK(mode):
                    _check_symlink(path, real_root, allowed)
                archive.add(path, arcname=relpath, recursive=False)
                n_entries += 1

    logger.debug(f"Packed {n_entries} entries from {root}")
    return buffer.getvalue()
