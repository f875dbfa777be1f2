import os
from dotenv import load_dotenv
from fastapi import FastAPI
from app.api import analyze_learning
from app.core.logging import configure_logging

load_dotenv()
configure_logging(os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI()

app.include_router(analyze_learning.router, prefix="/api/grok/analyze-learning")

@app.get("/")
def root():
    return {"message": "Learning analysis server is running"}
