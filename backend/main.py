"""FastAPI main application"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api import analysis, sessions, themes
from config import settings
from services.analysis_cache import analysis_cache
from services.llm_client import llm_client

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle manager for the application"""
    print(f"🚀 Visual Content Generator API starting on {settings.api_host}:{settings.api_port}")
    print(f"📁 Data directory: {settings.data_dir}")
    if llm_client.is_configured:
        print(f"🤖 LLM Provider: {settings.llm_provider}")
    else:
        print("🤖 LLM Provider: rules (rule-based extraction)")
    print(f"🎨 Default theme: {settings.default_theme}")
    print(f"✅ Visual Content Generator v{APP_VERSION} ready!")

    yield

    cleared = await analysis_cache.clear()
    print(f"👋 Visual Content Generator API shutting down ({cleared} cached analyses dropped)")

app = FastAPI(
    title="Visual Content Generator API",
    description="Turns text into ranked presentation and visual suggestions",
    version=APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
# Allow all origins since backend binds to localhost only (not network-exposed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers (prefixes are set on each router)
app.include_router(analysis.router)
app.include_router(themes.router)
app.include_router(sessions.router)

@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Visual Content Generator API",
        "version": APP_VERSION,
        "docs": "/docs"
    }

@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy", "llm_configured": llm_client.is_configured}

if __name__ == "__main__":
    import uvicorn
    config = uvicorn.Config(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="warning"
    )
    server = uvicorn.Server(config)
    server.run()
