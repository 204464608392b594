import sys
import tempfile
import unittest
from pathlib import Path


SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_ROOT))

from haproxy_dataplane_codegen.options import (  # noqa: E402
    DEFAULT_GENERATOR_IMAGE,
    CodegenOptions,
    selinux_enabled,
)


class TestCodegenOptions(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.enforce = self.root / "enforce"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_defaults(self) -> None:
        options = CodegenOptions.from_env({}, selinux_enforce_path=self.enforce)
        self.assertEqual(options.swagger_json, Path("haproxy-dataplaneapi-1.2.json"))
        self.assertEqual(options.output_dir, Path("openapi"))
        self.assertEqual(options.template_dir, Path("generator-template"))
        self.assertIsNone(options.generator_bin)
        self.assertEqual(options.generator_image, DEFAULT_GENERATOR_IMAGE)
        self.assertEqual(options.generator_image, "openapitools/openapi-generator-cli:v4.2.2")
        self.assertEqual(options.volume_opts, "")
        self.assertEqual(options.linter_path, Path("../../hack/tools/bin/golangci-lint"))
        self.assertEqual(options.backend_model, Path("openapi/model_backend.go"))
        self.assertEqual(options.frontend_model, Path("openapi/model_frontend.go"))

    def test_environment_overrides(self) -> None:
        env = {
            "SWAGGER_JSON": "spec/dataplane-2.0.json",
            "OUTPUT_DIR": "out",
            "TEMPLATE_DIR": "templates",
            "OPENAPI_GENERATOR_BIN": "/opt/bin/openapi-generator",
            "OPENAPI_GENERATOR_IMG": "example/generator:latest",
            "TOOLS_DIR": "tools",
            "GOLANGCI_LINT": "/usr/local/bin/golangci-lint",
        }
        options = CodegenOptions.from_env(env, selinux_enforce_path=self.enforce)
        self.assertEqual(options.swagger_json, Path("spec/dataplane-2.0.json"))
        self.assertEqual(options.output_dir, Path("out"))
        self.assertEqual(options.template_dir, Path("templates"))
        self.assertEqual(options.generator_bin, "/opt/bin/openapi-generator")
        self.assertEqual(options.generator_image, "example/generator:latest")
        self.assertEqual(options.tools_dir, Path("tools"))
        self.assertEqual(options.linter_path, Path("/usr/local/bin/golangci-lint"))

    def test_selinux_enforcing_adds_z_volume_option(self) -> None:
        self.enforce.write_text("1\n", encoding="utf-8")
        self.assertTrue(selinux_enabled(self.enforce))
        options = CodegenOptions.from_env({}, selinux_enforce_path=self.enforce)
        self.assertEqual(options.volume_opts, ":z")

    def test_selinux_permissive(self) -> None:
        self.enforce.write_text("0\n", encoding="utf-8")
        self.assertFalse(selinux_enabled(self.enforce))

    def test_explicit_volume_options_win(self) -> None:
        self.enforce.write_text("1\n", encoding="utf-8")
        options = CodegenOptions.from_env({"DOCKER_VOL_OPTS": ""}, selinux_enforce_path=self.enforce)
        self.assertEqual(options.volume_opts, "")


if __name__ == "__main__":
    unittest.main()
