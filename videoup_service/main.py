"""
Main Application Coordinator for the VideoUp Service.

This module wires configuration, logging, the video module and the API server
together and provides graceful startup/shutdown.
"""

import argparse
import logging
import signal
import sys
import time
from datetime import datetime
from typing import Optional

from .core.config import Config
from .core.logging_config import setup_logging, get_error_tracker, get_performance_logger
from .video.integration import create_video_module
from .api.server import APIServer


class VideoUpSystem:
    """Main application coordinator for the VideoUp Service"""

    def __init__(self, config_file: Optional[str] = None, config: Optional[Config] = None):
        # Load configuration first (basic logging will be used initially)
        self.config = config or Config(config_file)

        self.logger_setup = setup_logging(log_level=self.config.system.log_level, log_file=self.config.system.log_file)
        self.logger = logging.getLogger(__name__)

        self.error_tracker = get_error_tracker("main_system")
        self.performance_logger = get_performance_logger("main_system")

        # The one registry and payload store for this process live in the video module
        self.video_module = create_video_module(self.config)
        self.api_server = APIServer(self.config, self.video_module)

        self.running = False
        self.start_time: Optional[datetime] = None

        self._setup_signal_handlers()

        self.logger.info("VideoUp Service initialized")

    def _setup_signal_handlers(self) -> None:
        """Setup signal handlers for graceful shutdown"""

        def signal_handler(signum, frame):
            self.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
            self.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def start(self) -> bool:
        """Start the service"""
        if self.running:
            self.logger.warning("Service is already running")
            return True

        self.logger.info("Starting VideoUp Service...")
        self.performance_logger.start_timer("system_startup")
        self.start_time = datetime.now()

        try:
            if not self.api_server.start():
                self.error_tracker.log_warning("API server did not start", "api_startup")
                return False
        except Exception as e:
            self.error_tracker.log_error(e, "api_startup")
            return False

        self.running = True
        startup_time = self.performance_logger.end_timer("system_startup")
        self.logger.info(f"VideoUp Service started in {startup_time:.2f}s")
        return True

    def stop(self) -> None:
        """Stop the service gracefully"""
        if not self.running:
            return

        self.logger.info("Stopping VideoUp Service...")
        self.running = False

        try:
            self.api_server.stop()

            if self.start_time:
                uptime = (datetime.now() - self.start_time).total_seconds()
                self.logger.info(f"Service uptime: {uptime:.1f} seconds")

            self.logger.info("VideoUp Service stopped")

        except Exception as e:
            self.logger.error(f"Error during shutdown: {e}")

    def run(self) -> None:
        """Run the service (blocking call)"""
        if not self.start():
            self.logger.error("Failed to start service")
            return

        try:
            self.logger.info("Service running... Press Ctrl+C to stop")

            while self.running:
                time.sleep(1)
                if not self.api_server.is_running():
                    self.logger.error("API server exited unexpectedly")
                    break

        except KeyboardInterrupt:
            self.logger.info("Keyboard interrupt received")
        finally:
            self.stop()

    def is_running(self) -> bool:
        """Check if service is running"""
        return self.running


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="VideoUp Service")
    parser.add_argument("--config", type=str, help="Path to configuration file", default="config.json")
    parser.add_argument("--log-level", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override log level", default=None)
    parser.add_argument("--host", type=str, help="Override listen host", default=None)
    parser.add_argument("--port", type=int, help="Override listen port", default=None)
    parser.add_argument("--init-config", action="store_true", help="Write the effective configuration to --config and exit")
    return parser


def main(argv=None):
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)

    config = Config(args.config)
    if args.log_level:
        config.system.log_level = args.log_level
    if args.host is not None:
        config.server.host = args.host
    if args.port is not None:
        config.server.port = args.port

    if args.init_config:
        config.save_config()
        return

    system = VideoUpSystem(config=config)

    try:
        system.run()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
