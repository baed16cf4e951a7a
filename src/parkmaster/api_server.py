"""FastAPI server for the Park Master record store."""

from typing import Any, Callable, Dict, Optional

import structlog
from fastapi import Body, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config.models import AppConfig
from .exceptions import MissingDateKeyError, ParkMasterError, RecordNotFoundError
from .models.records import ExitRequest, LoginRequest, generate_uuid7, utc_now_iso
from .models.responses import ErrorResponse, HealthResponse, LoginResponse, OperationResponse
from .services import ClientRoster, DailyStatsAggregator, FacilitySettingsHolder, VehicleLedger
from .storage.record_store import RecordStore


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content=ErrorResponse(error=message).model_dump(), status_code=status_code)


def create_app(config: Optional[AppConfig] = None,
               store: Optional[RecordStore] = None,
               id_factory: Callable[[], str] = generate_uuid7,
               clock: Callable[[], str] = utc_now_iso) -> FastAPI:
    """Create and configure FastAPI application."""
    config = config or AppConfig()
    store = store or RecordStore(config.data_dir)

    app = FastAPI(
        title="Park Master API",
        description="Vehicle, permanent client, settings and daily statistics records for a parking facility",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    logger = structlog.get_logger("api_server")

    if config.api.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.api.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    # Store components in app state
    app.state.config = config
    app.state.store = store
    app.state.vehicles = VehicleLedger(store, id_factory=id_factory, clock=clock)
    app.state.clients = ClientRoster(store, id_factory=id_factory, clock=clock)
    app.state.daily_stats = DailyStatsAggregator(store)
    app.state.settings = FacilitySettingsHolder(store)

    # ============= Authentication =============

    @app.post("/api/auth/login", response_model=LoginResponse)
    async def login(credentials: LoginRequest):
        """Check the operator credential against the stored settings."""
        try:
            ok = await app.state.settings.verify_credential(credentials.username, credentials.password)
        except ParkMasterError as e:
            logger.error("Login check failed", error=str(e))
            return JSONResponse(
                content=LoginResponse(success=False, message="Server error").model_dump(),
                status_code=500
            )

        if ok:
            return LoginResponse(success=True, message="Login successful")
        return JSONResponse(
            content=LoginResponse(success=False, message="Invalid credentials").model_dump(),
            status_code=401
        )

    # ============= Vehicles =============

    @app.get("/api/vehicles")
    async def list_vehicles():
        """All vehicles, active and departed."""
        try:
            return await app.state.vehicles.list()
        except ParkMasterError as e:
            logger.error("Failed to fetch vehicles", error=str(e))
            return _error("Failed to fetch vehicles", 500)

    @app.post("/api/vehicles")
    async def add_vehicle(fields: Optional[Dict[str, Any]] = Body(None)):
        """Record a vehicle entering the facility."""
        try:
            vehicle = await app.state.vehicles.record_entry(fields)
            logger.info("Vehicle entry recorded", vehicle_id=vehicle["id"])
            return vehicle
        except ParkMasterError as e:
            logger.error("Failed to add vehicle", error=str(e))
            return _error("Failed to add vehicle", 500)

    @app.put("/api/vehicles/{vehicle_id}/exit")
    async def vehicle_exit(vehicle_id: str, payload: Optional[ExitRequest] = None):
        """Record a vehicle leaving with the fee charged."""
        fee = payload.fee if payload else None
        try:
            vehicle = await app.state.vehicles.record_exit(vehicle_id, fee)
            logger.info("Vehicle exit recorded", vehicle_id=vehicle_id, fee=fee)
            return vehicle
        except RecordNotFoundError:
            return _error("Vehicle not found", 404)
        except ParkMasterError as e:
            logger.error("Failed to update vehicle", vehicle_id=vehicle_id, error=str(e))
            return _error("Failed to update vehicle", 500)

    # ============= Permanent clients =============

    @app.get("/api/permanent-clients")
    async def list_permanent_clients():
        """All permanent clients."""
        try:
            return await app.state.clients.list()
        except ParkMasterError as e:
            logger.error("Failed to fetch permanent clients", error=str(e))
            return _error("Failed to fetch permanent clients", 500)

    @app.post("/api/permanent-clients")
    async def add_permanent_client(fields: Optional[Dict[str, Any]] = Body(None)):
        """Register a permanent client."""
        try:
            return await app.state.clients.register(fields)
        except ParkMasterError as e:
            logger.error("Failed to add permanent client", error=str(e))
            return _error("Failed to add permanent client", 500)

    @app.put("/api/permanent-clients/{client_id}")
    async def update_permanent_client(client_id: str, patch: Optional[Dict[str, Any]] = Body(None)):
        """Merge a partial update into a permanent client."""
        try:
            return await app.state.clients.update(client_id, patch)
        except RecordNotFoundError:
            return _error("Client not found", 404)
        except ParkMasterError as e:
            logger.error("Failed to update permanent client", client_id=client_id, error=str(e))
            return _error("Failed to update permanent client", 500)

    @app.delete("/api/permanent-clients/{client_id}", response_model=OperationResponse)
    async def remove_permanent_client(client_id: str):
        """Remove a permanent client; unknown ids succeed too."""
        try:
            return OperationResponse(success=await app.state.clients.remove(client_id))
        except ParkMasterError as e:
            logger.error("Failed to remove permanent client", client_id=client_id, error=str(e))
            return _error("Failed to remove permanent client", 500)

    # ============= Settings =============

    @app.get("/api/settings")
    async def get_settings():
        """Current facility settings."""
        try:
            return await app.state.settings.get()
        except ParkMasterError as e:
            logger.error("Failed to fetch settings", error=str(e))
            return _error("Failed to fetch settings", 500)

    @app.put("/api/settings")
    async def replace_settings(new_settings: Dict[str, Any] = Body(...)):
        """Replace the whole settings document."""
        try:
            return await app.state.settings.replace(new_settings)
        except ParkMasterError as e:
            logger.error("Failed to update settings", error=str(e))
            return _error("Failed to update settings", 500)

    # ============= Daily statistics =============

    @app.get("/api/daily-stats")
    async def list_daily_stats():
        """All daily statistics records."""
        try:
            return await app.state.daily_stats.list()
        except ParkMasterError as e:
            logger.error("Failed to fetch daily stats", error=str(e))
            return _error("Failed to fetch daily stats", 500)

    @app.post("/api/daily-stats")
    async def upsert_daily_stats(record: Dict[str, Any] = Body(...)):
        """Insert or replace the statistics for one date."""
        try:
            return await app.state.daily_stats.upsert(record)
        except MissingDateKeyError as e:
            return _error(str(e), 422)
        except ParkMasterError as e:
            logger.error("Failed to update daily stats", error=str(e))
            return _error("Failed to update daily stats", 500)

    # ============= Health =============

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        """Liveness check."""
        return HealthResponse()

    return app
