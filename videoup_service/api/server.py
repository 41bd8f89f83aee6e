"""
FastAPI Server for the VideoUp Service.

This module builds the FastAPI application and runs it under uvicorn.
"""

import logging
import threading
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI
import uvicorn

from ..core.config import Config
from ..video.integration import VideoModule
from .models import SuccessResponse, HealthResponse, ErrorResponse


class APIServer:
    """FastAPI server for the VideoUp Service"""

    def __init__(self, config: Config, video_module: VideoModule):
        self.config = config
        self.video_module = video_module
        self.logger = logging.getLogger(__name__)

        # Server state
        self.server_start_time = datetime.now()
        self.running = False
        self._server: Optional[uvicorn.Server] = None
        self._server_thread: Optional[threading.Thread] = None

        self.app = FastAPI(
            title="VideoUp Service API",
            description="Video metadata registration and binary payload upload",
            version="1.0.0",
            lifespan=self._lifespan,
            responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
        )

        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        await self.video_module.startup()
        self.logger.info("Video module ready")
        yield
        await self.video_module.cleanup()

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/", response_model=SuccessResponse)
        async def root():
            return SuccessResponse(message="VideoUp Service API")

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            return HealthResponse(status="healthy", timestamp=datetime.now().isoformat())

        @self.app.get("/system/status", response_model=SuccessResponse)
        async def get_system_status():
            """Get server and video module status"""
            return SuccessResponse(message="VideoUp Service status", data={**self.get_server_info(), "video": self.video_module.get_module_status()})

        self.app.include_router(self.video_module.get_api_routes())

    def start(self) -> bool:
        """Start the API server"""
        if self.running:
            self.logger.warning("API server is already running")
            return True

        if not self.config.server.enable_api:
            self.logger.info("API server disabled in configuration")
            return False

        try:
            self.logger.info(f"Starting API server on {self.config.server.host}:{self.config.server.port}")
            uvicorn_config = uvicorn.Config(self.app, host=self.config.server.host, port=self.config.server.port, log_level="info")
            self._server = uvicorn.Server(uvicorn_config)
            self.running = True

            # Start server in separate thread
            self._server_thread = threading.Thread(target=self._run_server, daemon=True)
            self._server_thread.start()

            return True

        except Exception as e:
            self.logger.error(f"Error starting API server: {e}")
            self.running = False
            return False

    def stop(self) -> None:
        """Stop the API server"""
        if not self.running:
            return

        self.logger.info("Stopping API server...")
        if self._server:
            self._server.should_exit = True
        if self._server_thread:
            self._server_thread.join(timeout=10)

        self.running = False
        self.logger.info("API server stopped")

    def _run_server(self) -> None:
        """Run the uvicorn server"""
        try:
            self._server.run()
        except Exception as e:
            self.logger.error(f"Error running API server: {e}")
        finally:
            self.running = False

    def is_running(self) -> bool:
        """Check if API server is running"""
        return self.running

    def get_server_info(self) -> Dict[str, Any]:
        """Get server information"""
        return {"running": self.running, "host": self.config.server.host, "port": self.config.server.port, "start_time": self.server_start_time.isoformat(), "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds()}
