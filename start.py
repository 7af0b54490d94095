"""Entry point to run the Slotkeeper API."""

import os
from pathlib import Path

# Load .env file FIRST before settings are read
from dotenv import load_dotenv
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)
print(f"✅ Loaded environment from: {env_path}")

import uvicorn


def main():
    print("=" * 50)
    print("Starting Slotkeeper API")
    print("=" * 50)
    print()

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    print(f"- API: http://localhost:{port}")
    print(f"- API Docs: http://localhost:{port}/docs")
    print()

    uvicorn.run("slotkeeper.main:app", host=host, port=port, reload=os.getenv("RELOAD") == "1")


if __name__ == "__main__":
    main()
