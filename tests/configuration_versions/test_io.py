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

import io
import os
import tarfile
import tempfile
import unittest
from pathlib import Path

from parameterized import parameterized

from tfe.common.exceptions import ClientValueError
from tfe.configuration_versions import pack
from tfe.configuration_versions.io import IgnoreRule


def _members(data: bytes) -> dict[str, tarfile.TarInfo]:
    with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
        return {member.name: member for member in archive.getmembers()}


class TestPack(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.root = Path(tmp.name)
        (self.root / "main.tf").write_text('resource "null_resource" "foo" {}\n')
        (self.root / "modules" / "network").mkdir(parents=True)
        (self.root / "modules" / "network" / "main.tf").write_text("variable \"cidr\" {}\n")

    def test_pack_files_and_directories(self) -> None:
        members = _members(pack(self.root))

        self.assertEqual({"main.tf", "modules", "modules/network", "modules/network/main.tf"}, set(members))
        self.assertTrue(members["main.tf"].isfile())
        self.assertTrue(members["modules"].isdir())

        with tarfile.open(fileobj=io.BytesIO(pack(self.root)), mode="r:gz") as archive:
            content = archive.extractfile("modules/network/main.tf").read()
        self.assertEqual(b'variable "cidr" {}\n', content)

    @unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "Symlinks are not supported")
    def test_pack_keeps_symlinks(self) -> None:
        (self.root / "link.tf").symlink_to("main.tf")
        (self.root / "shared").symlink_to("modules")

        members = _members(pack(self.root))

        self.assertTrue(members["link.tf"].issym())
        self.assertEqual("main.tf", members["link.tf"].linkname)
        self.assertTrue(members["shared"].issym())
        self.assertNotIn("shared/network", members)

    @unittest.skipUnless(hasattr(os, "mkfifo"), "Named pipes are not supported")
    def test_pack_skips_special_files(self) -> None:
        os.mkfifo(self.root / "pipe")

        self.assertNotIn("pipe", _members(pack(self.root)))

    def test_pack_empty_directory(self) -> None:
        with tempfile.TemporaryDirectory() as empty:
            self.assertEqual({}, _members(pack(empty)))

    def test_pack_requires_directory(self) -> None:
        with self.assertRaises(ClientValueError):
            pack(self.root / "main.tf")
        with self.assertRaises(ClientValueError):
            pack(self.root / "missing")

    def _write(self, relpath: str, content: str = "") -> None:
        path = self.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)

    def test_pack_skips_vcs_and_terraform_directories(self) -> None:
        self._write(".git/config", "[core]\n")
        self._write("modules/network/.git/HEAD", "ref: refs/heads/main\n")
        self._write(".terraform/providers/registry.terraform.io/null/provider", "binary")
        self._write(".terraform/modules/modules.json", "{}")

        members = _members(pack(self.root))

        self.assertIn(".terraform/modules", members)
        self.assertIn(".terraform/modules/modules.json", members)
        for name in (".git", ".git/config", "modules/network/.git", ".terraform", ".terraform/providers"):
            with self.subTest(name=name):
                self.assertNotIn(name, members)

    def test_pack_applies_terraformignore(self) -> None:
        self._write(".terraformignore", "# local files\n*.tfvars\n!public.tfvars\n/build/\n\n")
        self._write("secret.tfvars", 'password = "hunter2"\n')
        self._write("public.tfvars", 'region = "us-east-1"\n')
        self._write("modules/network/override.tfvars", "")
        self._write("build/plan.out", "plan")
        self._write("modules/network/build", "not a directory")

        members = _members(pack(self.root))

        self.assertIn(".terraformignore", members)
        self.assertIn("public.tfvars", members)
        self.assertIn("modules/network/build", members)
        for name in ("secret.tfvars", "modules/network/override.tfvars", "build", "build/plan.out"):
            with self.subTest(name=name):
                self.assertNotIn(name, members)

    def test_pack_without_ignore_rules(self) -> None:
        self._write(".git/config", "[core]\n")
        self._write(".terraformignore", "*.tfvars\n")
        self._write("secret.tfvars", "")

        members = _members(pack(self.root, apply_ignore=False))

        self.assertIn(".git/config", members)
        self.assertIn("secret.tfvars", members)

    @unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "Symlinks are not supported")
    def test_pack_rejects_symlink_outside_directory(self) -> None:
        outside = tempfile.TemporaryDirectory()
        self.addCleanup(outside.cleanup)
        target = Path(outside.name) / "credentials"
        target.write_text("secret")
        (self.root / "leak").symlink_to(target)

        with self.assertRaises(ClientValueError):
            pack(self.root)

        members = _members(pack(self.root, allowed_symlink_targets=[outside.name]))
        self.assertTrue(members["leak"].issym())

    @unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "Symlinks are not supported")
    def test_pack_rejects_relative_symlink_escaping_directory(self) -> None:
        (self.root / "modules" / "up").symlink_to("../../..")

        with self.assertRaises(ClientValueError):
            pack(self.root)

    @unittest.skipUnless(hasattr(os, "symlink") and os.name == "posix", "Symlinks are not supported")
    def test_pack_ignored_symlink_is_not_checked(self) -> None:
        self._write(".terraformignore", "leak\n")
        (self.root / "leak").symlink_to("/etc/passwd")

        self.assertNotIn("leak", _members(pack(self.root)))


class TestIgnoreRule(unittest.TestCase):
    @parameterized.expand(
        [
            ("*.tfvars", "secret.tfvars", False, True),
            ("*.tfvars", "env/prod/secret.tfvars", False, True),
            ("*.tfvars", "secret.tfvars.json", False, False),
            ("/build/", "build", True, True),
            ("/build/", "build/plan.out", False, True),
            ("/build/", "build", False, False),
            ("/build/", "modules/build", True, False),
            ("docs/*.md", "docs/README.md", False, True),
            ("docs/*.md", "docs/guide/README.md", False, False),
            ("docs/**/*.md", "docs/guide/README.md", False, True),
            ("**/fixtures", "tests/unit/fixtures/state.json", False, True),
            ("file?.txt", "file1.txt", False, True),
            ("file[!0-9].txt", "file1.txt", False, False),
            ("file[!0-9].txt", "filea.txt", False, True),
        ]
    )
    def test_matches(self, pattern: str, path: str, is_dir: bool, expected: bool) -> None:
        rule = IgnoreRule.parse(pattern)
        self.assertEqual(expected, rule.matches(path, is_dir))

    def test_parse(self) -> None:
        self.assertIsNone(IgnoreRule.parse(""))
        self.assertIsNone(IgnoreRule.parse("   "))
        self.assertIsNone(IgnoreRule.parse("# comment"))
        self.assertIsNone(IgnoreRule.parse("/"))

        rule = IgnoreRule.parse("!.terraform/modules/")
        self.assertTrue(rule.negated)
        self.assertTrue(rule.directory_only)
        self.assertEqual(".terraform/modules", rule.pattern)
