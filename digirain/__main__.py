from digirain.app import main

main()
