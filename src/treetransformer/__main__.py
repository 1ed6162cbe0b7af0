from treetransformer.cli import main

main()
