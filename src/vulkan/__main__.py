from vulkan.server import main

main()
