from storefront.engine import (
    initialize_engine,
    format_display_results,
    format_summary
)

if __name__ == "__main__":
    engine, catalog_store = initialize_engine()

    while True:
        user_input = input("\nWhat are you looking for? (or 'quit' to exit): ").strip()

        if user_input.lower() == 'quit':
            break

        result = engine.query(
            user_input,
            catalog_store.snapshot(),
            sort=engine.config.DEFAULT_SORT,
            limit=engine.config.MAX_RESULTS,
        )

        print(format_summary(result))
        if result.results:
            print(format_display_results(result))

            print("\nYou can refine your search by:")
            print("- Adding a price limit (\"under $50\")")
            print("- Naming a color or brand")
            print("- Asking for a size (\"size M\")")
            print("- Asking for well rated items (\"top rated\")")
        else:
            print("\nNo results found. Let's try a different search.")
