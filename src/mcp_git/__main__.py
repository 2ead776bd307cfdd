from mcp_git.cli import main

main()
