from shortlink.main import main

main()
