from wifistudy.cli.main import main

raise SystemExit(main())
