import io
import os
import unittest
from contextlib import redirect_stderr
from unittest.mock import patch

from fumen_core import config
from fumen_core.codec import decode


class TestConfig(unittest.TestCase):
    def test_given_debug_env_when_decoding_then_trace_on_stderr(self):
        err = io.StringIO()
        with patch.dict(os.environ, {"FUMEN_DEBUG": "1"}), redirect_stderr(err):
            decode("v115@vhVgH")
            decode("nope")
        text = err.getvalue()
        self.assertIn("[decode] 1 page(s)", text)
        self.assertIn("[decode] format tag", text)

    def test_given_debug_off_when_decoding_then_silent(self):
        err = io.StringIO()
        with patch.dict(os.environ, {"FUMEN_DEBUG": "0"}), redirect_stderr(err):
            decode("v115@vhVgH")
        self.assertEqual(err.getvalue(), "")

    def test_given_http_max_env_when_reading_then_parsed_or_default(self):
        with patch.dict(os.environ, {"FUMEN_HTTP_MAX": "2048"}):
            self.assertEqual(config.http_max_bytes(), 2048)
        for raw in ("", "abc", "0", "-5"):
            with self.subTest(raw=raw), patch.dict(os.environ, {"FUMEN_HTTP_MAX": raw}):
                self.assertEqual(config.http_max_bytes(), config.DEFAULT_HTTP_MAX)

    def test_given_port_and_flask_debug_env_when_reading_then_values(self):
        with patch.dict(os.environ, {"PORT": "8123", "FLASK_DEBUG": "yes"}):
            self.assertEqual(config.server_port(), 8123)
            self.assertTrue(config.flask_debug())


if __name__ == "__main__":
    unittest.main(verbosity=2)
