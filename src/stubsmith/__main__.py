from stubsmith.cli.main import app

app(prog_name="stubsmith")
