from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.query_router import router as query_router
from core.bootstrap import build_orchestrator


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Store handles live exactly as long as the app
    app.state.orchestrator = build_orchestrator()
    try:
        yield
    finally:
        app.state.orchestrator.close()


app = FastAPI(
    title="Knowledge Universe API",
    description="Routed, multi-domain knowledge search with graph context and concept connections.",
    version="1.0.0",
    lifespan=lifespan,
)

origins = [
    "http://localhost",
    "http://localhost:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(query_router)

@app.get("/")
def read_root():
    return {"message": "Knowledge Universe API is running."}
