from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.config import settings
from src.database import Base, engine
from src import models  # noqa: F401  registers tables on Base
from src.auth import router as auth_router
from src.trains import router as trains_router
from src.hotels import router as hotels_router
from src.bookings import router as bookings_router
from src.notifications import router as notifications_router
from src.admin import router as admin_router

# Create tables that do not exist yet
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Train schedules linked to hotel reservations with delay-adjusted check-in",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173", "http://localhost:8080"],  # React dev servers
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    auth_router.router,
    prefix=f"{settings.API_V1_STR}/auth",
    tags=["Authentication"]
)

app.include_router(
    trains_router.router,
    prefix=f"{settings.API_V1_STR}/trains",
    tags=["Trains"]
)

app.include_router(
    hotels_router.router,
    prefix=f"{settings.API_V1_STR}/hotels",
    tags=["Hotels"]
)

app.include_router(
    bookings_router.router,
    prefix=f"{settings.API_V1_STR}/bookings",
    tags=["Bookings"]
)

app.include_router(
    notifications_router.router,
    prefix=f"{settings.API_V1_STR}/notifications",
    tags=["Notifications"]
)

app.include_router(
    admin_router.router,
    tags=["Admin System"]
)

@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Train Hotel Sync API",
        "version": "1.0.0",
        "docs": "/docs"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
