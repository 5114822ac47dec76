from webapi.application import WebApiApplication


def main():
    WebApiApplication().run()


if __name__ == "__main__":
    main()
