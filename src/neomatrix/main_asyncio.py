"""
main_asyncio.py - Application entry point for the NeoMatrix editor
------------------------------------------------------------------

Responsible for:
- loading configuration and restoring the autosaved document
- wiring services (Dependency Injection)
- running the API server and the autosave loop
- saving and stopping cleanly on Ctrl+C / SIGTERM
"""

import asyncio
import signal
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI

from neomatrix.api.dependencies import set_service_container
from neomatrix.api.main import create_app
from neomatrix.engine.scroll_player import ScrollPlayer
from neomatrix.managers import ConfigManager
from neomatrix.models.config import EditorConfig
from neomatrix.services import EditorService, ExportService, StorageService, ServiceContainer
from neomatrix.utils.logger import get_logger, configure_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


# ---------------------------------------------------------------------------
# WIRING
# ---------------------------------------------------------------------------

def build_services(config_manager: ConfigManager, config: Optional[EditorConfig] = None) -> ServiceContainer:
    """Restore the document and assemble the service container"""
    config = config or config_manager.config

    storage = StorageService(config.autosave_path, config)
    editor = EditorService(storage.load(), config=config)
    player = ScrollPlayer()
    editor.subscribe(player.on_editor_change)

    return ServiceContainer(
        editor_service=editor,
        export_service=ExportService(config.gif_cell_scale),
        storage_service=storage,
        scroll_player=player,
        config_manager=config_manager
    )


# ---------------------------------------------------------------------------
# API SERVER RUNNER
# ---------------------------------------------------------------------------

async def run_api_server(app: FastAPI, host: str = "0.0.0.0", port: int = 8000) -> None:
    """
    Run FastAPI/Uvicorn server in asyncio event loop.

    Uvicorn's own signal handlers are disabled; shutdown is driven by main().
    """
    config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        loop="asyncio",
        log_level="info",
        access_log=False,
    )

    server = uvicorn.Server(config)
    server.install_signal_handlers = lambda: None

    try:
        log.debug(f"Starting API server on {host}:{port}")
        await server.serve()
    except asyncio.CancelledError:
        log.debug("API server cancelled")
        raise


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main() -> None:
    """Main async entry point"""
    config_manager = ConfigManager()
    config = config_manager.load()
    configure_logger(min_level=config.log_level)

    log.info("Starting NeoMatrix editor...")

    services = build_services(config_manager, config)
    set_service_container(services)

    app = create_app()
    api_task = asyncio.create_task(run_api_server(app, config.api_host, config.api_port))
    autosave_task = asyncio.create_task(
        services.storage_service.autosave_loop(services.editor_service, config.autosave_interval_s)
    )

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            # add_signal_handler is unavailable on Windows event loops
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(shutdown_event.set))

    log.info("Application initialized. Waiting for exit signal...")

    signal_task = asyncio.create_task(shutdown_event.wait())
    await asyncio.wait([api_task, signal_task], return_when=asyncio.FIRST_COMPLETED)

    # Shutdown: stop preview, cancel tasks, final save
    await services.scroll_player.stop()
    for task in (autosave_task, api_task, signal_task):
        task.cancel()
    await asyncio.gather(autosave_task, api_task, signal_task, return_exceptions=True)

    services.storage_service.save(services.editor_service.animation)
    set_service_container(None)
    log.info("NeoMatrix editor shut down cleanly.")


def run() -> None:
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
    except Exception as e:
        log.error(f"Fatal error: {type(e).__name__}: {e}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run()
