from ipfs_relay.app import main

main()
