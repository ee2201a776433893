import uvicorn

from storefront import create_app

app = create_app()

if __name__ == "__main__":
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=8000)
