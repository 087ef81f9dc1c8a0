from heronsFountain.runner import main

main()
