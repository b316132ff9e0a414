from guild_build.cli import main

raise SystemExit(main())
