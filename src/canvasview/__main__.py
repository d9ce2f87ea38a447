from canvasview import app

app()
