import os
import tempfile
import unittest
from unittest import TestCase
from maskali.utils import *


class TestUtilsConfig(TestCase):
    def setUp(self):
        self.config = {
            "mask": {
                "retained_char": "x"
                      },
            "output": {
                 "format": "fasta",
                 "width": 60
                           }
        }
        self.tmp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _write(self, content):
        filename = os.path.join(self.tmp_dir.name, "config.yml")
        with open(filename, "w") as f:
            f.write(content)
        return filename

    def test_check_required(self):
        """
        tests if function correctly checks parameter keys presence
        """
        check_required(self.config, self.config.keys())

    def test_check_required_error(self):
        """
        tests if function raises MissingParameterError if key is not present
        """
        self.assertRaises(MissingParameterError,
                          check_required, self.config,
                          ["missing"])

    def test_parse_config(self):
        config = parse_config("mask:\n  retained_char: M\n")
        self.assertEqual(config, {"mask": {"retained_char": "M"}})

    def test_parse_config_error(self):
        """
        tests if YAML syntax errors are turned into InvalidParameterError
        """
        self.assertRaises(InvalidParameterError, parse_config, "mask: [x\n")

    def test_write_read_config_file(self):
        filename = os.path.join(self.tmp_dir.name, "out.yml")
        write_config_file(filename, self.config)
        self.assertEqual(read_config_file(filename), self.config)

    def test_load_settings_default(self):
        config = load_settings()
        self.assertEqual(config["mask"]["retained_char"], "x")
        self.assertEqual(config["output"]["format"], "fasta")
        self.assertEqual(config["output"]["width"], 80)

    def test_load_settings_override(self):
        """
        tests if user settings are merged over defaults
        """
        config = load_settings(self._write("output:\n  format: aln\n"))
        self.assertEqual(config["output"]["format"], "aln")
        self.assertEqual(config["output"]["width"], 80)
        self.assertEqual(config["mask"]["retained_char"], "x")

    def test_load_settings_empty_file(self):
        config = load_settings(self._write("# nothing set\n"))
        self.assertEqual(config["output"]["width"], 80)

    def test_load_settings_invalid(self):
        for content in [
            "mask:\n  retained_char: xy\n",
            "output:\n  format: stockholm\n",
            "output:\n  width: 0\n",
            "output:\n  width: yes\n",
            "- just\n- a list\n",
            "mask:\n",
            "output: fasta\n",
        ]:
            self.assertRaises(
                InvalidParameterError, load_settings, self._write(content)
            )

    def test_verify_settings_missing(self):
        del self.config["output"]["width"]
        self.assertRaises(MissingParameterError, verify_settings, self.config)


if __name__ == '__main__':
        unittest.main()
