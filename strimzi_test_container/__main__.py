from strimzi_test_container.cli import app

app(prog_name="strimzi-test-container")
