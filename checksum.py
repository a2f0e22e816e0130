from cli.main import checksum_cli


if __name__ == '__main__':
    checksum_cli()
