from .cli import app

app(prog_name="c2pa-signer")
