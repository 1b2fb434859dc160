from .adapters.inbound.cli.commands import app

app(prog_name="smoogle")
