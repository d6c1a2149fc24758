from owners_audit.main import run

run()
