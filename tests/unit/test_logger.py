import logging

from certextract.logging.logger import Log


class TestLogConfigure:
    def test_sets_level_and_single_handler(self) -> None:
        Log.configure("debug", "dev")
        Log.configure("warning", "dev")

        logger = logging.getLogger("certextract")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_format_depends_on_environment(self) -> None:
        logger = logging.getLogger("certextract")

        Log.configure("INFO", "dev")
        verbose = logger.handlers[0].formatter
        Log.configure("INFO", "production")
        compact = logger.handlers[0].formatter

        assert verbose is not None and "%(name)s" in verbose._fmt  # type: ignore[operator]
        assert compact is not None and compact._fmt == "%(asctime)s [%(levelname)s] %(message)s"
