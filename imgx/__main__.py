from imgx.cli import run

run()
