"""Tests for argv validation and operation selection."""

import tempfile
import unittest
from pathlib import Path

from eboot_dlc_patcher.cli.main import build_dispatcher
from eboot_dlc_patcher.lib.dispatcher import (
    NoOperationError,
    SchemaError,
    UnknownOperationError,
)
from test_utils import touch_files


class DispatcherTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.a_elf, self.b_elf, self.a_pkg, self.b_pkg = touch_files(
            self.root, "a.elf", "b.elf", "a.pkg", "b.pkg"
        )
        self.image0 = self.root / "Image0"
        self.image0.mkdir()
        self.dispatcher = build_dispatcher()

    def tearDown(self) -> None:
        self._td.cleanup()

    def parse(self, *tokens):
        return self.dispatcher.parse([str(t) for t in tokens])

    def assertRejected(self, *tokens) -> SchemaError:
        with self.assertRaises(SchemaError) as ctx:
            self.parse(*tokens)
        return ctx.exception


class SelectionTests(DispatcherTestCase):
    def test_no_tokens_is_no_operation(self) -> None:
        with self.assertRaises(NoOperationError):
            self.parse()

    def test_no_operation_is_not_a_schema_error(self) -> None:
        self.assertFalse(issubclass(NoOperationError, SchemaError))

    def test_unknown_operation(self) -> None:
        with self.assertRaises(UnknownOperationError) as ctx:
            self.parse("list-exec", "-d", self.a_pkg)
        self.assertEqual(ctx.exception.name, "list-exec")
        self.assertIn("patch, extract-dlc, list-dlc", ctx.exception.message)
        self.assertEqual(ctx.exception.prog, "eboot-dlc-patcher")

    def test_flag_before_operation_is_unmatched(self) -> None:
        self.assertRejected("--dlc", self.a_pkg)
        err = self.assertRejected("--bogus")
        self.assertIn("unrecognized arguments: --bogus", err.message)


class PatchParseTests(DispatcherTestCase):
    def test_repeated_aliases_collect_in_order(self) -> None:
        inv = self.parse("patch", "-e", self.a_elf, "-e", self.b_elf, "-d", self.a_pkg, "-f")
        self.assertEqual(inv.name, "patch")
        self.assertEqual(inv["exec"], [self.a_elf, self.b_elf])
        self.assertEqual(inv["dlc"], [self.a_pkg])
        self.assertIsNone(inv["output-dir"])
        self.assertIs(inv["force-in-eboot"], True)

    def test_long_aliases_and_multiple_values(self) -> None:
        out = self.root / "out"
        inv = self.parse(
            "patch", "--dlc", self.a_pkg, self.b_pkg, self.a_pkg,
            "--exec", self.a_elf, "--output-dir", out,
        )
        self.assertEqual(inv["dlc"], [self.a_pkg, self.b_pkg, self.a_pkg])
        self.assertEqual(inv["output-dir"], str(out))
        self.assertIs(inv["force-in-eboot"], False)

    def test_force_accepts_explicit_value(self) -> None:
        inv = self.parse("patch", "-e", self.a_elf, "-f", "false", "-d", self.a_pkg)
        self.assertIs(inv["force-in-eboot"], False)

    def test_missing_required_options(self) -> None:
        err = self.assertRejected("patch", "-d", self.a_pkg)
        self.assertIn("--exec/-e", err.message)
        self.assertEqual(err.prog, "eboot-dlc-patcher patch")

    def test_nonexistent_file(self) -> None:
        err = self.assertRejected("patch", "-e", self.root / "nope.elf", "-d", self.a_pkg)
        self.assertIn("file does not exist", err.message)

    def test_empty_output_dir_rejected(self) -> None:
        err = self.assertRejected("patch", "-e", self.a_elf, "-d", self.a_pkg, "-o", "")
        self.assertIn("--output-dir/-o: empty path", err.message)

    def test_option_without_value(self) -> None:
        err = self.assertRejected("patch", "-e", self.a_elf, "-d")
        self.assertIn("--dlc/-d", err.message)

    def test_output_dir_given_twice(self) -> None:
        err = self.assertRejected(
            "patch", "-e", self.a_elf, "-d", self.a_pkg, "-o", self.root / "x", "-o", self.root / "y"
        )
        self.assertIn("may only be given once", err.message)

    def test_unknown_flag_for_operation(self) -> None:
        err = self.assertRejected("patch", "-e", self.a_elf, "-d", self.a_pkg, "--image0", self.image0)
        self.assertIn("unrecognized arguments", err.message)

    def test_abbreviated_flag_not_accepted(self) -> None:
        err = self.assertRejected("patch", "--exe", self.a_elf, "-d", self.a_pkg)
        self.assertIn("--exe", err.message)

    def test_stray_positional_rejected(self) -> None:
        self.assertRejected("patch", "extra", "-e", self.a_elf, "-d", self.a_pkg)


class ExtractParseTests(DispatcherTestCase):
    def test_valid_invocation(self) -> None:
        inv = self.parse("extract-dlc", "--dlc", self.a_pkg, "--dlc", self.b_pkg, "--image0", self.image0)
        self.assertEqual(inv.name, "extract-dlc")
        self.assertEqual(inv["dlc"], [self.a_pkg, self.b_pkg])
        self.assertEqual(inv["image0"], self.image0)

    def test_image0_required(self) -> None:
        err = self.assertRejected("extract-dlc", "-d", self.a_pkg)
        self.assertIn("--image0/-i", err.message)

    def test_image0_must_be_existing_directory(self) -> None:
        err = self.assertRejected("extract-dlc", "-d", self.a_pkg, "-i", self.a_pkg)
        self.assertIn("not a directory", err.message)

    def test_empty_image0_rejected(self) -> None:
        err = self.assertRejected("extract-dlc", "-d", self.a_pkg, "-i", "")
        self.assertIn("--image0/-i: empty path", err.message)

    def test_image0_exactly_one(self) -> None:
        err = self.assertRejected("extract-dlc", "-d", self.a_pkg, "-i", self.image0, "-i", self.image0)
        self.assertIn("may only be given once", err.message)

    def test_image0_takes_single_value(self) -> None:
        self.assertRejected("extract-dlc", "-d", self.a_pkg, "-i", self.image0, self.root)


class ListParseTests(DispatcherTestCase):
    def test_valid_invocation(self) -> None:
        inv = self.parse("list-dlc", "-d", self.b_pkg, self.a_pkg)
        self.assertEqual(dict(inv.values), {"dlc": [self.b_pkg, self.a_pkg]})

    def test_force_flag_not_declared_for_listing(self) -> None:
        self.assertRejected("list-dlc", "-d", self.a_pkg, "-f")

    def test_diagnostic_shape(self) -> None:
        err = self.assertRejected("list-dlc")
        text = err.format()
        self.assertTrue(text.startswith("usage: eboot-dlc-patcher list-dlc"))
        self.assertIn("eboot-dlc-patcher list-dlc: error: ", text)
