import gzip
import os
import tempfile
import unittest
from unittest import TestCase
from maskali.utils import *


class TestUtilsSystem(TestCase):

    def test_valid_file_FileWithContent(self):
        """
        test if a file with content returns True
        """
        tmp = tempfile.NamedTemporaryFile(delete=False)
        tmp.write(b"Testasdklasdaklndaklndakldnsalkdnasdnalsdkald")
        tmp.close()
        self.assertTrue(valid_file(tmp.name))
        os.unlink(tmp.name)

    def test_valid_file_EmptyFile(self):
        """
        test if a file with content returns False because file is empty
        """
        tmp = tempfile.NamedTemporaryFile(delete=False)
        tmp.close()
        self.assertFalse(valid_file(tmp.name))
        os.unlink(tmp.name)

    def test_valid_file_Error(self):
        """
        test if a file with content returns False because could not be found
        """
        tmp = tempfile.NamedTemporaryFile(delete=False)
        tmp.close()
        self.assertFalse(valid_file(tmp.name+"asdja"))
        os.unlink(tmp.name)

    def test_valid_file_None(self):
        self.assertFalse(valid_file(None))

    def test_verify_resources_EmptyFileError(self):
        """
        Test if verify_resources returns ResourceError if files are empty
        """
        tmp = tempfile.NamedTemporaryFile(delete=False)
        tmp.close()

        f = [tmp.name]
        with self.assertRaises(ResourceError) as context:
            verify_resources("Verify_resources_empty", *f)
        self.assertTrue("Verify_resources_empty" in str(context.exception))
        os.unlink(tmp.name)

    def test_verify_resources_NonExistentFileError(self):
        """
        Test if verify_resources returns ResourceError if files do not exist
        """
        f = ["asdfadasdjghfaqzfg"]

        with self.assertRaises(ResourceError) as context:
            verify_resources("Verify_resources_nonExistent", *f)
        self.assertTrue("Verify_resources_nonExistent" in str(context.exception))


class TestUtilsOpenText(TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.content = "# STOCKHOLM 1.0\nG1 .mAKIIN\n//\n"

    def tearDown(self):
        self.tmp_dir.cleanup()

    def test_open_text_plain(self):
        filename = os.path.join(self.tmp_dir.name, "plain.sto")
        with open(filename, "w") as f:
            f.write(self.content)

        self.assertFalse(is_gzipped(filename))
        with open_text(filename) as f:
            self.assertEqual(f.read(), self.content)

    def test_open_text_gzip(self):
        """
        Test whether gzip files are detected by content, not by extension
        """
        filename = os.path.join(self.tmp_dir.name, "compressed.sto")
        with gzip.open(filename, "wt") as f:
            f.write(self.content)

        self.assertTrue(is_gzipped(filename))
        with open_text(filename) as f:
            self.assertEqual(list(f), self.content.splitlines(keepends=True))

    def test_open_text_missing(self):
        filename = os.path.join(self.tmp_dir.name, "missing.sto")
        self.assertRaises(ResourceError, open_text, filename)

    def test_open_text_empty(self):
        filename = os.path.join(self.tmp_dir.name, "empty.sto")
        open(filename, "w").close()

        with open_text(filename) as f:
            self.assertEqual(f.read(), "")


if __name__ == '__main__':
    unittest.main()
