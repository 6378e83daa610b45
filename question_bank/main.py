from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from question_bank.config import settings
from question_bank.database import init_storage
from question_bank.logging_config import configure_logging
from question_bank.routes import auth, questions, categories, editor, admin

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Seed the local store once; every route receives this handle through get_db
    configure_logging()
    app.state.db = init_storage(settings.storage_path)
    yield

app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="API for managing a bank of multiple-choice exam questions",
    lifespan=lifespan,
)

# CORS middleware for cross-origin requests (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers with prefixes and tags
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(questions.router, prefix="/questions", tags=["Questions"])
app.include_router(categories.router, prefix="/categories", tags=["Categories"])
app.include_router(editor.router, prefix="/editor", tags=["Statement Editor"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])

# Root endpoint
@app.get("/")
async def root():
    return {"message": "Welcome to Banco de Questões API", "version": app.version}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("question_bank.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
