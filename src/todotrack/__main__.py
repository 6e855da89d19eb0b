from todotrack.cli import app

app(prog_name="todotrack")
