from emoji_remover.cli import main

raise SystemExit(main())
