from habitica_mcp.server import main

main()
