from create_ic_app.cli import main

raise SystemExit(main())
