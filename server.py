# server.py
import uvicorn
from main import config

if __name__ == "__main__":
    uvicorn.run(
        "main:app",  # Points to the app instance; routers are mounted in main
        host="0.0.0.0",
        port=8080,
        reload=config.environment == "development",
        log_level=config.logging.level_value.lower(),
    )
