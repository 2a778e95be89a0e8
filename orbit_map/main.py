from fastapi import FastAPI
from orbit_map.api.router import api_router


app = FastAPI(title="Orbit Map API")

# Include the master router containing all our endpoints
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the Orbit Map API"}
