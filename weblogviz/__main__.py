from weblogviz.cli import run

run()
