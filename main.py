import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS

# Routers
from routers.practice import router as practice_router
from session import SessionTracker

logger = logging.getLogger("adaptive-maths")
logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Adaptive Maths Practice API")

# Allow calls from the front-end dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One learner per process; routes reach it through deps.session.get_tracker
app.state.tracker = SessionTracker()


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(practice_router)  # /practice/...
