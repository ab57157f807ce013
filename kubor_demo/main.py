"""Main module entrypoint for local and container runtime execution.

This module parses flags, validates startup configuration, starts the HTTP
responder and runs the lifecycle until the process exits.
"""

import argparse
import logging
from collections.abc import Sequence

from kubor_demo.bootstrap import (
    bootstrap_create_application,
    bootstrap_create_background_server,
    bootstrap_create_lifecycle_controller,
)
from kubor_demo.config import SettingsLoadError, config_configure_logging, config_load_settings
from kubor_demo.lifecycle import (
    ProcessTerminator,
    ReadinessFlag,
    lifecycle_install_signal_handler,
    lifecycle_terminate_process,
)
from kubor_demo.server import SERVER_FAILURE_EXIT_CODE, ListenError

logger = logging.getLogger("kubor_demo")

APPLICATION_NAME = "kubor-demo"


def main_create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Flags accept both single- and double-dash spellings and `-flag=value`.
    Unset flags fall back to environment variables and then to defaults.

    Returns:
        argparse.ArgumentParser: Parser producing settings overrides.
    """

    argument_parser = argparse.ArgumentParser(
        prog=APPLICATION_NAME,
        description="Demo HTTP service for readiness, graceful shutdown and forced-exit testing",
        allow_abbrev=False,
    )
    argument_parser.add_argument(
        "-readyAfter",
        "--readyAfter",
        dest="ready_after",
        type=str,
        help="Duration it takes after this service reports it is ready, e.g. 15s (default: 0)",
    )
    argument_parser.add_argument(
        "-exitAfter",
        "--exitAfter",
        dest="exit_after",
        type=str,
        help="Duration after which this service exits with exitCode, counted from becoming ready. "
        "0 never exits (default: 0)",
    )
    argument_parser.add_argument(
        "-exitCode",
        "--exitCode",
        dest="exit_code",
        type=int,
        help="Code used when this service exits after exitAfter (default: 1)",
    )
    argument_parser.add_argument(
        "-listen",
        "--listen",
        dest="listen",
        type=str,
        help="Address the HTTP endpoints listen to (default: :8080)",
    )
    argument_parser.add_argument(
        "-logLevel",
        "--logLevel",
        dest="log_level",
        type=str,
        help="Logging threshold (default: INFO)",
    )
    return argument_parser


def main(argv: Sequence[str] | None = None, terminator: ProcessTerminator = lifecycle_terminate_process) -> None:
    """Run the service until a signal arrives or the lifecycle completes.

    Args:
        argv: Optional command-line arguments; `sys.argv` by default.
        terminator: Callable ending the process with an exit code.

    Returns:
        None: The process normally ends inside `terminator`.

    Raises:
        SystemExit: Raised by argparse when flags or settings are invalid.
    """

    argument_parser = main_create_argument_parser()
    parsed_arguments = argument_parser.parse_args(argv)
    overrides = {name: value for name, value in vars(parsed_arguments).items() if value is not None}
    try:
        settings = config_load_settings(overrides)
    except SettingsLoadError as error:
        argument_parser.error(str(error))

    config_configure_logging(settings.log_level)
    logger.info("%s (branch=%s, revision=%s) is starting...", APPLICATION_NAME, settings.branch, settings.revision)
    lifecycle_install_signal_handler(terminator)

    readiness = ReadinessFlag()
    application = bootstrap_create_application(settings=settings, readiness=readiness)
    try:
        server = bootstrap_create_background_server(settings=settings, application=application, terminator=terminator)
    except ListenError as error:
        logger.critical("%s", error)
        terminator(SERVER_FAILURE_EXIT_CODE)
        return
    controller = bootstrap_create_lifecycle_controller(settings=settings, readiness=readiness)
    exit_code = controller.lifecycle_run(start_serving=server.server_start)
    logger.info("Good bye...")
    terminator(exit_code)


if __name__ == "__main__":
    main()
