from .telegram_bot import main

main()
