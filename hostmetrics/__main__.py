from hostmetrics.main import run

run()
