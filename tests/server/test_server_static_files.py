import os
import stat
import tempfile
import unittest
from pathlib import Path

from server.static_files import (
    ForbiddenPathError,
    StaticFileNotFoundError,
    StaticFileReadError,
    guess_content_type,
    is_contained,
    load_static_file,
    resolve_static_file,
)


class ResolveStaticFileTests(unittest.TestCase):
    def test_resolve_static_file_returns_path_inside_root(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            resolved = resolve_static_file(root, "/assets/app.js")
            self.assertEqual(Path(os.path.abspath(root), "assets", "app.js"), resolved)

    def test_resolve_static_file_maps_root_to_default_document(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = os.path.abspath(temp_dir)
            self.assertEqual(Path(root, "fireworks.html"), resolve_static_file(root, "/"))
            self.assertEqual(Path(root, "fireworks.html"), resolve_static_file(root, ""))
            self.assertEqual(
                Path(root, "landing.html"),
                resolve_static_file(root, "/", default_document="landing.html"),
            )

    def test_resolve_static_file_rejects_path_traversal(self) -> None:
        root = "/srv/www"
        for request_path in (
            "/../secret.txt",
            "/../../etc/passwd",
            "/assets/../../secret.txt",
            "..",
            "/a/b/../../../x",
        ):
            with self.subTest(request_path=request_path):
                with self.assertRaises(ForbiddenPathError):
                    resolve_static_file(root, request_path)

    def test_resolve_static_file_rejects_sibling_with_shared_prefix(self) -> None:
        with self.assertRaises(ForbiddenPathError):
            resolve_static_file("/srv/www", "/../www-secret/x")

    def test_resolve_static_file_collapses_inner_segments(self) -> None:
        root = "/srv/www"
        self.assertEqual(
            Path("/srv/www/style.css"),
            resolve_static_file(root, "/assets/../style.css"),
        )
        self.assertEqual(
            Path("/srv/www/img/logo.png"),
            resolve_static_file(root, "//img/./logo.png"),
        )
        self.assertEqual(Path("/srv/www"), resolve_static_file(root, "/."))

    def test_resolve_static_file_keeps_in_root_paths_allowed(self) -> None:
        root = "/srv/www"
        for request_path in ("/index.html", "/a/b/c.js", "/a/../b.css", "/..hidden"):
            with self.subTest(request_path=request_path):
                resolved = resolve_static_file(root, request_path)
                self.assertTrue(is_contained(root, str(resolved)))

    def test_is_contained_requires_separator_boundary(self) -> None:
        self.assertTrue(is_contained("/srv/www", "/srv/www"))
        self.assertTrue(is_contained("/srv/www", "/srv/www/x"))
        self.assertFalse(is_contained("/srv/www", "/srv/www-secret/x"))
        self.assertFalse(is_contained("/srv/www", "/srv"))
        self.assertTrue(is_contained("/", "/etc"))


class LoadStaticFileTests(unittest.TestCase):
    def test_load_static_file_reads_bytes_and_content_type(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            style = Path(temp_dir) / "style.css"
            style.write_bytes(b"body { color: red; }")

            content = load_static_file(style)

            self.assertEqual(b"body { color: red; }", content.body)
            self.assertEqual("text/css; charset=UTF-8", content.content_type)

    def test_load_static_file_is_repeatable(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            image = Path(temp_dir) / "image.JPG"
            image.write_bytes(b"\xff\xd8\xff\xe0")

            self.assertEqual(load_static_file(image), load_static_file(image))
            self.assertEqual("image/jpeg", load_static_file(image).content_type)

    def test_load_static_file_reports_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(StaticFileNotFoundError):
                load_static_file(Path(temp_dir) / "missing.png")

    def test_load_static_file_reports_directory_as_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(StaticFileReadError):
                load_static_file(temp_dir)

    def test_load_static_file_reports_embedded_nul_as_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with self.assertRaises(StaticFileReadError):
                load_static_file(os.path.join(temp_dir, "bad\x00name.html"))

    @unittest.skipIf(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        "permission bits are not enforced for root",
    )
    def test_load_static_file_reports_unreadable_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            secret = Path(temp_dir) / "locked.html"
            secret.write_text("<p>locked</p>", encoding="utf-8")
            secret.chmod(0)
            try:
                with self.assertRaises(StaticFileReadError):
                    load_static_file(secret)
            finally:
                secret.chmod(stat.S_IRUSR | stat.S_IWUSR)


class GuessContentTypeTests(unittest.TestCase):
    def test_guess_content_type_uses_fixed_table(self) -> None:
        expected = {
            "index.html": "text/html; charset=UTF-8",
            "app.js": "application/javascript; charset=UTF-8",
            "style.css": "text/css; charset=UTF-8",
            "logo.png": "image/png",
            "photo.jpg": "image/jpeg",
            "photo.jpeg": "image/jpeg",
            "icon.svg": "image/svg+xml",
        }
        for name, content_type in expected.items():
            with self.subTest(name=name):
                self.assertEqual(content_type, guess_content_type(Path(name)))

    def test_guess_content_type_ignores_extension_case(self) -> None:
        self.assertEqual("image/jpeg", guess_content_type("image.JPG"))
        self.assertEqual("text/html; charset=UTF-8", guess_content_type("INDEX.Html"))

    def test_guess_content_type_falls_back_for_unknown_extensions(self) -> None:
        for name in ("blob.unknownbinaryextension", "README", "data.json", ".html", ""):
            with self.subTest(name=name):
                self.assertEqual("application/octet-stream", guess_content_type(name))


if __name__ == "__main__":
    unittest.main()
