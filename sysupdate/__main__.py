from sysupdate.cli import main

main()
