from homeslice_server.main import main

main()
