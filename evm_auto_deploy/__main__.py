from evm_auto_deploy.setup.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
